"""Dialog history recording."""

from .recorder import DialogRecorder, IDialogRecorder

__all__ = ["DialogRecorder", "IDialogRecorder"]
