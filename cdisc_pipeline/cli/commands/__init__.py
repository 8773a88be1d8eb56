"""Click commands of the ``cdisc-pipeline`` CLI."""
