"""
The wudesim.epanet package reads EPANET INP files and converts EPANET units.
"""
from .io import InpFile
from .util import FlowUnits, UnitSystem, QualType, HydParam, QualParam, to_si, convert_network
from . import io, util, exceptions
