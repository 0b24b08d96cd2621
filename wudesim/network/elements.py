"""
The wudesim.network.elements module includes elements of a water network model,
including junction, tank, reservoir, pipe, pump, and valve.

.. rubric:: Contents

.. autosummary::

    Junction
    Tank
    Reservoir
    Pipe
    Pump
    Valve

"""
import logging

from .base import Node, Link, NodeType, LinkType

logger = logging.getLogger(__name__)


def _float_or_None(value):
    if value is not None:
        return float(value)
    return None


class Junction(Node):
    """
    Junction class, inherited from Node.

    .. rubric:: Constructor

    This class is intended to be instantiated through the
    :class:`~wudesim.network.model.WaterNetworkModel.add_junction()` method.

    Parameters
    ----------
    name : string
        Name of the junction.
    elevation : float
        Elevation of the junction, in INP file units
    base_demand : float
        Base demand of the junction, in INP file flow units. A negative
        demand marks the junction as a water quality source.

    """
    _base_attributes = ['name', 'elevation', 'base_demand']

    def __init__(self, name, elevation=0.0, base_demand=0.0):
        super(Junction, self).__init__(name)
        self.elevation = elevation
        self.base_demand = base_demand

    @property
    def node_type(self):
        """``'Junction'`` (read only)"""
        return NodeType.Junction

    @property
    def elevation(self):
        """float: elevation of the junction"""
        return self._elevation
    @elevation.setter
    def elevation(self, value):
        self._elevation = float(value)

    @property
    def base_demand(self):
        """float: base demand of the junction"""
        return self._base_demand
    @base_demand.setter
    def base_demand(self, value):
        self._base_demand = float(value)

    @property
    def is_source(self):
        """bool: True if the junction injects water (negative demand)"""
        return self._base_demand < 0


class Tank(Node):
    """
    Tank class, inherited from Node.

    Only the name and elevation are required; the remaining attributes are
    ``None`` when the INP file leaves them out.

    Parameters
    ----------
    name : string
        Name of the tank.
    elevation : float
        Elevation at the bottom of the tank
    init_level : float, optional
        Initial water level
    min_level : float, optional
        Minimum water level
    max_level : float, optional
        Maximum water level
    diameter : float, optional
        Tank diameter
    min_vol : float, optional
        Minimum volume
    vol_curve : str, optional
        Name of a volume curve
    overflow : str, optional
        Overflow indicator (YES/NO)

    """
    _base_attributes = ['name', 'elevation', 'init_level', 'min_level', 'max_level',
                        'diameter', 'min_vol', 'vol_curve', 'overflow']

    def __init__(self, name, elevation=0.0, init_level=None, min_level=None, max_level=None,
                 diameter=None, min_vol=None, vol_curve=None, overflow=None):
        super(Tank, self).__init__(name)
        self.elevation = float(elevation)
        self.init_level = _float_or_None(init_level)
        self.min_level = _float_or_None(min_level)
        self.max_level = _float_or_None(max_level)
        self.diameter = _float_or_None(diameter)
        self.min_vol = _float_or_None(min_vol)
        self.vol_curve = vol_curve
        self.overflow = overflow

    @property
    def node_type(self):
        """``'Tank'`` (read only)"""
        return NodeType.Tank


class Reservoir(Node):
    """
    Reservoir class, inherited from Node.

    Parameters
    ----------
    name : string
        Name of the reservoir.
    base_head : float
        Base head at the reservoir
    head_pattern : str, optional
        Name of the head pattern

    """
    _base_attributes = ['name', 'base_head', 'head_pattern']

    def __init__(self, name, base_head=0.0, head_pattern=None):
        super(Reservoir, self).__init__(name)
        self.base_head = float(base_head)
        self.head_pattern = head_pattern

    @property
    def node_type(self):
        """``'Reservoir'`` (read only)"""
        return NodeType.Reservoir


class Pipe(Link):
    """
    Pipe class, inherited from Link.

    .. rubric:: Constructor

    This class is intended to be instantiated through the
    :class:`~wudesim.network.model.WaterNetworkModel.add_pipe()` method.

    Parameters
    ----------
    name : string
        Name of the pipe
    start_node_name : string
         Name of the start node
    end_node_name : string
         Name of the end node
    length : float
        Length of the pipe; feet or meters in the INP file, meters after conversion
    diameter : float
        Diameter of the pipe; inches or millimeters in the INP file, meters after conversion

    """
    _base_attributes = ['name', 'start_node_name', 'end_node_name', 'length', 'diameter']

    def __init__(self, name, start_node_name, end_node_name, length, diameter):
        super(Pipe, self).__init__(name, start_node_name, end_node_name)
        self.length = length
        self.diameter = diameter

    @property
    def link_type(self):
        """``'Pipe'`` (read only)"""
        return LinkType.Pipe

    @property
    def length(self):
        """float: length of the pipe"""
        return self._length
    @length.setter
    def length(self, value):
        self._length = float(value)

    @property
    def diameter(self):
        """float: diameter of the pipe"""
        return self._diameter
    @diameter.setter
    def diameter(self, value):
        self._diameter = float(value)


class Pump(Link):
    """
    Pump class, inherited from Link. Curve and setting parameters are not kept.
    """

    @property
    def link_type(self):
        """``'Pump'`` (read only)"""
        return LinkType.Pump


class Valve(Link):
    """
    Valve class, inherited from Link. Type and setting parameters are not kept.
    """

    @property
    def link_type(self):
        """``'Valve'`` (read only)"""
        return LinkType.Valve
