"""
lmbeis.constants

Physical constants shared by every model component.
"""

import scipy.constants as const

F = const.physical_constants['Faraday constant'][0]  # [C/mol]
R = const.R                                           # [J/(mol K)]
zero_Celsius = const.zero_Celsius                     # [K]


def thermal_factor(T: float) -> float:
    """
    Inverse thermal voltage f = F/(RT) [1/V] at absolute temperature T [K].
    """
    return F / R / T
