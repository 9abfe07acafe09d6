class PageshotsError(Exception):
    "base error for pageshots"


class InvalidSizeFormat(PageshotsError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid size format: {value}. Expected format: WIDTHxHEIGHT (e.g., 1000x1000)"
        )


class NoUrlsError(PageshotsError, ValueError):
    def __init__(self):
        super().__init__("At least one URL is required")


class ReadinessError(PageshotsError):
    "raised when a page could not be brought to a capturable state"


class NavigationTimeout(ReadinessError):
    def __init__(self, url: str, timeout_millis: int):
        self.url = url
        self.timeout_millis = timeout_millis
        super().__init__(
            f"Navigation timeout of {timeout_millis} ms exceeded while loading {url}"
        )
