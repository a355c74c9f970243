from lmbeis.cellparams.model import (
    CellModel, Const, Negative, Positive, Layer,
    Fixed, Lookup, Arrhenius,
)
from lmbeis.cellparams.resolve import ResolvedParameterSet, resolve_at_temperature, as_resolved
from lmbeis.cellparams.io import load_cell_model
