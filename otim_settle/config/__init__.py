from .settings import REQUIRED_VARS, Settings, load_env_file, load_settings

__all__ = ["REQUIRED_VARS", "Settings", "load_env_file", "load_settings"]
