"""Pure numeric core: no I/O, no catalog access.

- distance: parallax to light-years
- random_stream: identifier-seeded LCG
- fold: phase folding
- scoring: box-model goodness of fit
- synthetic: procedural light curves, spectra and folded curves
- optimizer: explore/exploit parameter search
- detrend / transit_estimate: light-curve conditioning and quick measurements
- habitability: weighted habitability score and classification
"""

from tess_hub.compute.detrend import median_detrend
from tess_hub.compute.distance import parallax_to_distance_ly
from tess_hub.compute.fold import fold_phase, phase_fold
from tess_hub.compute.habitability import (
    HabitabilityAssessment,
    HabitabilityClass,
    assess_habitability,
    assess_profile_habitability,
)
from tess_hub.compute.optimizer import (
    OptimizationResult,
    OptimizationTrial,
    OptimizerConfig,
    SearchPhase,
    StochasticParameterOptimizer,
)
from tess_hub.compute.random_stream import SeededRandomStream, seed_from_identifier
from tess_hub.compute.scoring import SCORE_CEILING, box_model, transit_fit_score
from tess_hub.compute.synthetic import (
    GeneratorConfig,
    SyntheticSignalGenerator,
    SyntheticSignals,
    generate_radial_velocity_curve,
    generate_synthetic_signals,
    transit_parameters_from_profile,
)
from tess_hub.compute.transit_estimate import estimate_transit_parameters

__all__ = [
    "GeneratorConfig",
    "HabitabilityAssessment",
    "HabitabilityClass",
    "OptimizationResult",
    "OptimizationTrial",
    "OptimizerConfig",
    "SCORE_CEILING",
    "SearchPhase",
    "SeededRandomStream",
    "StochasticParameterOptimizer",
    "SyntheticSignalGenerator",
    "SyntheticSignals",
    "assess_habitability",
    "assess_profile_habitability",
    "box_model",
    "estimate_transit_parameters",
    "fold_phase",
    "generate_radial_velocity_curve",
    "generate_synthetic_signals",
    "median_detrend",
    "parallax_to_distance_ly",
    "phase_fold",
    "seed_from_identifier",
    "transit_fit_score",
    "transit_parameters_from_profile",
]
