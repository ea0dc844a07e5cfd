from .manager import ConfigManager, DumpConfig

__all__ = ['ConfigManager', 'DumpConfig']
