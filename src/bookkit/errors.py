class BookError(Exception):
    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path

class ConfigError(BookError):
    pass

class BuildError(BookError):
    pass

class MissingSourceError(BuildError):
    pass

class ClipboardError(BookError):
    pass
