from typing import Optional, Sequence


class LightbarsError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(LightbarsError):
    # errors related to configuration.
    pass

class ContextError(LightbarsError):
    # errors while loading or merging render context data.
    pass

class TemplateError(LightbarsError):
    # errors related to template loading and rendering.
    pass

class TemplateNotFound(TemplateError):
    # no probed name/extension combination could be read from the store.
    def __init__(self, name: str, attempted: Sequence[str] = ()):
        self.name = name
        self.attempted = list(attempted) or [name]
        super().__init__(f"template not found: '{name}' (tried: {', '.join(self.attempted)})")

class TemplateSyntaxError(TemplateError):
    # unbalanced or misplaced block tags.
    def __init__(self, message: str, source_name: str = "<string>",
                 line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.source_name = source_name
        self.line = line
        self.column = column
        location = source_name if line is None else f"{source_name}:{line}:{column}"
        super().__init__(f"{location}: {message}")

class TemplateNestingError(TemplateSyntaxError):
    # block nesting deeper than the configured maximum.
    pass

class OutputError(LightbarsError):
    # errors during output operations.
    pass
