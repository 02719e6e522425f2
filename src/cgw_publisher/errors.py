"""Exception types for the content gateway publisher."""


class CgwPublisherError(Exception):
    """Base class for fatal publisher errors."""


class ManifestError(CgwPublisherError):
    """Data file is missing, unparsable, or lacks required contentGateway keys."""


class ConfigError(CgwPublisherError):
    """Required configuration (e.g. credentials) is missing."""


class PublisherInvocationError(CgwPublisherError):
    """The external publisher command could not be launched."""


class PublisherError(CgwPublisherError):
    """The external publisher ran but reported failure.

    Only raised when failing on publish errors is enabled.
    """

    def __init__(self, return_code: int, output: str):
        super().__init__(
            f"PUBLISH_FAILED: publisher exited with code {return_code}"
        )
        self.return_code = return_code
        self.output = output
