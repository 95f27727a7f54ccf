class ClipboardError(Exception):
    """Raised when a clipboard primitive cannot write text."""
