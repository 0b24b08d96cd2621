"""
The wudesim.network package contains methods to define a water network model
and to load it from an EPANET INP file.
"""
from .base import Node, Link, NodeType, LinkType
from .elements import Junction, Reservoir, Tank, Pipe, Pump, Valve
from .model import WaterNetworkModel
from .options import Options, HydraulicOptions, QualityOptions, TimeOptions, \
    ReactionOptions, HourMinute
from .io import read_inpfile, load_inpfile, to_dict, to_graph, write_json
