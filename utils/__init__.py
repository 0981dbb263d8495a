from .utils import load_yaml, validate_config_paths

__all__ = ["load_yaml", "validate_config_paths"]
