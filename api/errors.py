# errors.py
# Typed failures raised by the hazard curve engine

class HazardCurveError(Exception):
    """Base error. `status` is the HTTP code the web layer answers with."""
    status = 500


class ValidationError(HazardCurveError):
    """A required query parameter is missing."""
    status = 400


class NotFoundError(HazardCurveError):
    """Unknown edition/region/vs30/period, or the point is outside coverage."""
    status = 404


class DataIntegrityError(HazardCurveError):
    """The stored grid is corrupt or inconsistent."""
    status = 500


class DegenerateInterpolationError(DataIntegrityError, ArithmeticError):
    """Two supposedly distinct samples share the same x."""
