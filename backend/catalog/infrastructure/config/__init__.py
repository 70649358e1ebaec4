from .settings import DatabaseEngineOption, EnvironmentOption, Settings, get_settings

__all__ = [
    "DatabaseEngineOption",
    "EnvironmentOption",
    "Settings",
    "get_settings",
]
