from __future__ import annotations


class FitTrackError(Exception):
    pass


class InvalidInput(FitTrackError, ValueError):
    pass


class NotFound(FitTrackError, LookupError):
    pass
