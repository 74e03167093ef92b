class TrackerInitError(RuntimeError):
    """The hand-tracking model or the video source could not be started."""


class MalformedHandFrameError(ValueError):
    """A landmark set did not have the 21 points the hand model produces."""
