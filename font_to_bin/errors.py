# Errors raised while compiling a bitmap font. Every one of them aborts the run.


class FontCompileError(Exception):
    kind = "font-compile"


class DirectoryNotFoundError(FontCompileError, FileNotFoundError):
    kind = "directory-not-found"


class FormatError(FontCompileError):
    kind = "format"

    def __init__(self, message, path=None, line=None):
        self.path = path
        self.line = line
        if path is not None and line is not None:
            message = f"{path}:{line}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class UnsupportedFeatureError(FormatError):
    kind = "unsupported-feature"


class DuplicateDefinitionError(FormatError):
    kind = "duplicate-definition"


class MissingJamoError(FontCompileError, KeyError):
    kind = "missing-jamo"

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        return f"Jamo not found: {self.key}"


class LengthMismatchError(FontCompileError):
    kind = "length-mismatch"


class ResourceFormatError(FontCompileError):
    kind = "resource-format"
