# services/assembler.py
# Packages an interpolated AFE curve with its x-axis and query metadata

from datetime import datetime, timezone
from typing import Sequence

from models import CurvePoint, HazardCurveQuery, InterpolatedCurve


def assemble(iml: Sequence[float], afe: Sequence[float],
             metadata: HazardCurveQuery) -> InterpolatedCurve:
    """Pair IML[i] with AFE[i], in IML order."""
    return InterpolatedCurve(
        metadata=metadata,
        date=datetime.now(timezone.utc),
        data=[CurvePoint(x=x, y=y) for x, y in zip(iml, afe)],
    )
