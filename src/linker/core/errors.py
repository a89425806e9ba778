class LinkerError(Exception):
    pass


class DataSourceError(LinkerError):
    pass


class RateLimitError(DataSourceError):
    pass


class InvalidAddressError(LinkerError, ValueError):
    pass
