from dataclasses import dataclass, field


# =========================
#        DATA MODELS
# =========================
@dataclass(frozen=True, kw_only=True)
class CountDistribution:
    count: int
    weight: float


@dataclass(frozen=True, kw_only=True)
class OperatorWeights:
    """Relative frequency of each operator symbol in generated constraints."""

    unary: tuple[tuple[str, float], ...]
    binary: tuple[tuple[str, float], ...]


@dataclass(kw_only=True)
class ProblemParameters:
    meeting_count: int
    days_in_range: int
    unary_count_distribution: tuple[CountDistribution, ...]
    binary_count_distribution: tuple[CountDistribution, ...]
    operator_weights: OperatorWeights
    random_seed: int = field(default=37)
