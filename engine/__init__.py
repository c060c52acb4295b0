"""
engine/
-------
Consumption & recording layer.

    from engine import Stepper, Recorder, step_to_dict
"""

from engine.stepper   import Stepper, StepperState, StepperExhausted
from engine.recorder  import Recorder, RunMetrics, StepLimitExceeded
from engine.serialize import step_to_dict, to_json, to_plain

__all__ = [
    "Stepper",
    "StepperState",
    "StepperExhausted",
    "Recorder",
    "RunMetrics",
    "StepLimitExceeded",
    "step_to_dict",
    "to_json",
    "to_plain",
]
