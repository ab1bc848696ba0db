from .oscillators import (
    MODELS,
    OscillatorModes,
    build_modes,
    duffing_field,
    duffing_modes,
    van_der_pol_field,
    van_der_pol_limit_cycle,
    van_der_pol_modes,
)

__all__ = [
    "MODELS",
    "OscillatorModes",
    "build_modes",
    "duffing_field",
    "duffing_modes",
    "van_der_pol_field",
    "van_der_pol_limit_cycle",
    "van_der_pol_modes",
]
