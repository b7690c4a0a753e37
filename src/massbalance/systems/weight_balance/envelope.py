"""Center of gravity envelope.

The envelope is the certified range of CG positions as a function of gross
weight. It is given as a table of breakpoints sorted by weight. Between
breakpoints the forward and aft limits are linearly interpolated.

Typical usage:
    envelope = CGEnvelope.from_points([
        {"weight": 940, "cg_min": 94.49, "cg_max": 99.61},
        {"weight": 1080, "cg_min": 94.49, "cg_max": 99.61},
        {"weight": 1310, "cg_min": 97.20, "cg_max": 99.61},
    ])
    ok = is_within_envelope(1200.0, 98.0, envelope)
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any


class EnvelopeError(ValueError):
    """Raised when an envelope table is malformed."""


@dataclass(frozen=True)
class CGEnvelopePoint:
    """One breakpoint of the envelope.

    Attributes:
        weight: Gross weight of the breakpoint.
        cg_min_in: Forward CG limit at this weight (inches from datum).
        cg_max_in: Aft CG limit at this weight (inches from datum).
    """

    weight: float
    cg_min_in: float
    cg_max_in: float


@dataclass(frozen=True)
class CGEnvelope:
    """Validated, ordered envelope table.

    Construction fails with EnvelopeError unless the table has at least one
    point, weights are strictly ascending and cg_min_in <= cg_max_in at every
    point. Strictly ascending weights rule out the zero-width segment that
    would otherwise divide by zero during interpolation.
    """

    points: tuple[CGEnvelopePoint, ...]

    def __post_init__(self) -> None:
        points = tuple(self.points)
        object.__setattr__(self, "points", points)

        if not points:
            raise EnvelopeError("Envelope must contain at least one point")

        for index, point in enumerate(points):
            if point.cg_min_in > point.cg_max_in:
                raise EnvelopeError(
                    f"Envelope point {index} at weight {point.weight}: "
                    f"cg_min {point.cg_min_in} is aft of cg_max {point.cg_max_in}"
                )

        for index, (lower, upper) in enumerate(zip(points, points[1:])):
            if upper.weight == lower.weight:
                raise EnvelopeError(
                    f"Envelope points {index} and {index + 1} share weight {lower.weight}"
                )
            if upper.weight < lower.weight:
                raise EnvelopeError(
                    f"Envelope points must ascend by weight: "
                    f"{lower.weight} is followed by {upper.weight}"
                )

    @classmethod
    def from_points(cls, points: Iterable[CGEnvelopePoint | Mapping[str, Any]]) -> "CGEnvelope":
        """Build an envelope from points or from mappings.

        Mappings use the keys ``weight``, ``cg_min`` and ``cg_max``.

        Raises:
            EnvelopeError: If an entry is incomplete or the table is malformed.
        """
        parsed = []
        for index, point in enumerate(points):
            if isinstance(point, CGEnvelopePoint):
                parsed.append(point)
                continue
            try:
                parsed.append(
                    CGEnvelopePoint(
                        weight=float(point["weight"]),
                        cg_min_in=float(point["cg_min"]),
                        cg_max_in=float(point["cg_max"]),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise EnvelopeError(f"Invalid envelope point {index}: {point!r}") from e
        return cls(tuple(parsed))

    @property
    def min_weight(self) -> float:
        return self.points[0].weight

    @property
    def max_weight(self) -> float:
        return self.points[-1].weight

    def limits_at(self, weight: float) -> tuple[float, float] | None:
        """Get the (forward, aft) CG limits at a gross weight.

        Below the first breakpoint the first band applies unchanged. Above the
        last breakpoint there is no band and None is returned.

        Args:
            weight: Gross weight.

        Returns:
            (cg_min_in, cg_max_in), or None if weight is above the table.
        """
        first = self.points[0]
        if weight < first.weight:
            return first.cg_min_in, first.cg_max_in

        if weight > self.points[-1].weight:
            return None

        if len(self.points) == 1:
            return first.cg_min_in, first.cg_max_in

        for lower, upper in zip(self.points, self.points[1:]):
            if lower.weight <= weight <= upper.weight:
                # Return stored values at breakpoints so limits are exact there
                if weight == lower.weight:
                    return lower.cg_min_in, lower.cg_max_in
                if weight == upper.weight:
                    return upper.cg_min_in, upper.cg_max_in

                ratio = (weight - lower.weight) / (upper.weight - lower.weight)
                cg_min = lower.cg_min_in + ratio * (upper.cg_min_in - lower.cg_min_in)
                cg_max = lower.cg_max_in + ratio * (upper.cg_max_in - lower.cg_max_in)
                return cg_min, cg_max

        # NaN weight falls through every comparison
        return None

    def contains(self, weight: float, cg: float) -> bool:
        """Check whether (weight, cg) lies inside the envelope."""
        limits = self.limits_at(weight)
        if limits is None:
            return False
        cg_min, cg_max = limits
        return cg_min <= cg <= cg_max

    def outline(self) -> list[tuple[float, float]]:
        """Get the envelope boundary as a closed polygon of (cg, weight) pairs.

        Forward limits are listed bottom to top, then aft limits top to bottom,
        and the first vertex is repeated at the end.
        """
        forward = [(p.cg_min_in, p.weight) for p in self.points]
        aft = [(p.cg_max_in, p.weight) for p in reversed(self.points)]
        polygon = forward + aft
        return polygon + [polygon[0]]


def is_within_envelope(
    weight: float,
    cg: float,
    envelope: CGEnvelope | Sequence[CGEnvelopePoint],
) -> bool:
    """Check whether a loading lies inside the CG envelope.

    Args:
        weight: Gross weight.
        cg: CG position in inches from datum.
        envelope: A CGEnvelope, or a sequence of breakpoints that will be
            validated first.

    Returns:
        True if cg is within the (interpolated) limits at this weight. Weights
        below the table use the first band; weights above it are always out.

    Raises:
        EnvelopeError: If a raw sequence of breakpoints is malformed.

    Examples:
        >>> points = [CGEnvelopePoint(940, 94.49, 99.61), CGEnvelopePoint(1310, 97.20, 99.61)]
        >>> is_within_envelope(500, 95.0, points)
        True
        >>> is_within_envelope(1400, 98.0, points)
        False
    """
    if not isinstance(envelope, CGEnvelope):
        envelope = CGEnvelope.from_points(envelope)
    return envelope.contains(weight, cg)
