from sysoutlogger.actions.system_out import (
    SYSTEM_OUT_PATTERN,
    CodeAction,
    ConversionResult,
    RewriteConfig,
    StreamConfig,
    SystemOutArgumentMatch,
    SystemOutMatch,
    SystemStream,
    TextEdit,
    apply_edits,
    convert_source,
    find_system_out_call,
    get_system_out_arguments,
    provide_code_actions,
)

__all__ = [
    "SYSTEM_OUT_PATTERN",
    "CodeAction",
    "ConversionResult",
    "RewriteConfig",
    "StreamConfig",
    "SystemOutArgumentMatch",
    "SystemOutMatch",
    "SystemStream",
    "TextEdit",
    "apply_edits",
    "convert_source",
    "find_system_out_call",
    "get_system_out_arguments",
    "provide_code_actions",
]
