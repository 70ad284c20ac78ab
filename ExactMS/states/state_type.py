from enum import Enum


class StateType(Enum):
    MASS_DETECTION_STATE = "mass_detection_state"
    EXPORT_STATE = "export_state"
