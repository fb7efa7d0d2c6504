from .preset_sync import PresetSync

__all__ = ["PresetSync"]
