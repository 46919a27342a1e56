"""Compilation errors. Every error is fatal to the file being compiled."""


class AnalogError(Exception):
    """Base error; the message always names the file."""

    def __init__(self, msg: str, file_path: str):
        self.msg: str = msg
        self.file_path: str = file_path
        super().__init__(msg + " " + file_path)


class MissingNameError(AnalogError):
    """The file path has no stem to derive a class name from."""


class ClassificationError(AnalogError):
    """Neither a template nor a script block: not a component or a directive."""


class InvalidImportAttributeError(AnalogError):
    """An `analog` import attribute names an unknown route."""


class StructuralError(AnalogError):
    """The synthesized skeleton lacks the class, decorator or constructor."""


class MetadataShapeError(AnalogError):
    """Decorator metadata is not an object literal."""


class ParseError(AnalogError):
    """Syntax error in the script block, with location info."""

    def __init__(self, msg: str, file_path: str, lineno: int, col: int):
        self.lineno: int = lineno
        self.col: int = col
        super().__init__(msg, file_path)

    def __str__(self) -> str:
        return (
            self.file_path
            + ":"
            + str(self.lineno)
            + ":"
            + str(self.col)
            + ": "
            + self.msg
        )
