class PipelineInfrastructureError(Exception):
    pass


class DataSourceError(PipelineInfrastructureError):
    pass


class DataSourceNotFoundError(DataSourceError):
    pass


class DataParseError(DataSourceError):
    pass


class DataValidationError(DataSourceError):
    pass


class DatasetStoreError(PipelineInfrastructureError):
    pass


class XportGenerationError(PipelineInfrastructureError):
    pass


class ImputationError(PipelineInfrastructureError):
    pass
