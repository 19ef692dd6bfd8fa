"""Network emulator with Go-Back-N and Selective Repeat transport protocols."""

__version__ = "1.1.0"

__all__ = ["packets", "emulator", "gbn", "sr", "cli"]