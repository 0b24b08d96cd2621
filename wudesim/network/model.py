"""
The wudesim.network.model module includes methods to build the water network
model handed to the water quality solver.
"""
import logging
from collections import OrderedDict

import pandas as pd

from .base import Node, Link
from .elements import Junction, Tank, Reservoir, Pipe, Pump, Valve
from .options import Options

logger = logging.getLogger(__name__)


class WaterNetworkModel(object):
    """
    Water network model class.

    Nodes and links are kept in the order they are added, which is the order
    they appear in the INP file.

    Parameters
    -------------------
    inp_file_name: str (optional)
        Directory and filename of EPANET inp file to load into the
        :class:`~wudesim.network.model.WaterNetworkModel` object.
    """

    def __init__(self, inp_file_name=None):

        # Network name
        self.name = None

        self._options = Options()
        self._node_reg = OrderedDict()
        self._link_reg = OrderedDict()
        self._sources = []
        self.si_units = False
        """bool: True once lengths, diameters and reaction coefficients are in SI units"""

        if inp_file_name:
            from wudesim.network.io import read_inpfile
            read_inpfile(inp_file_name, append=self)

    def _compare(self, other):
        """
        Parameters
        ----------
        other: WaterNetworkModel

        Returns
        -------
        bool
        """
        if (
            self.num_junctions != other.num_junctions
            or self.num_reservoirs != other.num_reservoirs
            or self.num_tanks != other.num_tanks
            or self.num_pipes != other.num_pipes
            or self.num_pumps != other.num_pumps
            or self.num_valves != other.num_valves
        ):
            return False
        for name, node in self.nodes():
            if name not in other._node_reg or not node._compare(other.get_node(name)):
                return False
        for name, link in self.links():
            if name not in other._link_reg or not link._compare(other.get_link(name)):
                return False
        if self.sources != other.sources:
            return False
        if self.options != other.options:
            return False
        return True

    def _assign_from(self, other):
        """Take over the contents of another model"""
        self.__dict__.update(other.__dict__)

    @property
    def options(self):
        """The model's options

        Returns
        -------
        Options
        """
        return self._options

    @property
    def sources(self):
        """list: Names of the junctions that act as water quality sources, in file order"""
        return self._sources

    def nodes(self, node_type=None):
        """Iterate over (name, node) pairs, optionally of one node class"""
        for name, node in self._node_reg.items():
            if node_type is None or node_type is Node or isinstance(node, node_type):
                yield name, node

    def links(self, link_type=None):
        """Iterate over (name, link) pairs, optionally of one link class"""
        for name, link in self._link_reg.items():
            if link_type is None or link_type is Link or isinstance(link, link_type):
                yield name, link

    def junctions(self):
        """Iterator over all junctions"""
        return self.nodes(Junction)

    def tanks(self):
        """Iterator over all tanks"""
        return self.nodes(Tank)

    def reservoirs(self):
        """Iterator over all reservoirs"""
        return self.nodes(Reservoir)

    def pipes(self):
        """Iterator over all pipes"""
        return self.links(Pipe)

    def pumps(self):
        """Iterator over all pumps"""
        return self.links(Pump)

    def valves(self):
        """Iterator over all valves"""
        return self.links(Valve)

    ### #
    ### Create nodes and links

    def _add_node(self, node):
        if node.name in self._node_reg:
            raise ValueError('The name provided for the {} ({}) is already used'.format(
                str(node.node_type).lower(), node.name))
        self._node_reg[node.name] = node
        return node

    def _add_link(self, link):
        if link.name in self._link_reg:
            raise ValueError('The name provided for the {} ({}) is already used'.format(
                str(link.link_type).lower(), link.name))
        self._link_reg[link.name] = link
        return link

    def add_junction(self, name, elevation=0.0, base_demand=0.0):
        """
        Adds a junction to the water network model

        Parameters
        -------------------
        name : string
            Name of the junction.
        elevation : float
            Elevation of the junction.
        base_demand : float
            Base demand at the junction.
        """
        return self._add_node(Junction(name, elevation, base_demand))

    def add_tank(self, name, elevation=0.0, init_level=None, min_level=None, max_level=None,
                 diameter=None, min_vol=None, vol_curve=None, overflow=None):
        """
        Adds a tank to the water network model

        Parameters
        -------------------
        name : string
            Name of the tank.
        elevation : float
            Elevation at the tank.
        init_level, min_level, max_level, diameter, min_vol : float, optional
            Tank geometry and levels
        vol_curve : str, optional
            Name of a volume curve
        overflow : str, optional
            Overflow indicator
        """
        return self._add_node(Tank(name, elevation, init_level, min_level, max_level,
                                   diameter, min_vol, vol_curve, overflow))

    def add_reservoir(self, name, base_head=0.0, head_pattern=None):
        """
        Adds a reservoir to the water network model

        Parameters
        ----------
        name : string
            Name of the reservoir.
        base_head : float, optional
            Base head at the reservoir.
        head_pattern : string, optional
            Name of the head pattern.
        """
        return self._add_node(Reservoir(name, base_head, head_pattern))

    def add_pipe(self, name, start_node_name, end_node_name, length, diameter):
        """
        Adds a pipe to the water network model

        Parameters
        ----------
        name : string
            Name of the pipe.
        start_node_name : string
             Name of the start node.
        end_node_name : string
             Name of the end node.
        length : float
            Length of the pipe.
        diameter : float
            Diameter of the pipe.
        """
        return self._add_link(Pipe(name, start_node_name, end_node_name, length, diameter))

    def add_pump(self, name, start_node_name, end_node_name):
        """Adds a pump to the water network model"""
        return self._add_link(Pump(name, start_node_name, end_node_name))

    def add_valve(self, name, start_node_name, end_node_name):
        """Adds a valve to the water network model"""
        return self._add_link(Valve(name, start_node_name, end_node_name))

    def add_source(self, node_name):
        """
        Mark a junction as a water quality source

        Parameters
        ----------
        node_name : string
            Name of the source junction
        """
        self._sources.append(node_name)

    ### #
    ### Get elements from the model

    def get_node(self, name):
        """
        Get a specific node

        Parameters
        ----------
        name : str
            The node name

        Returns
        -------
        Junction, Tank, or Reservoir

        """
        return self._node_reg[name]

    def get_link(self, name):
        """
        Get a specific link

        Parameters
        ----------
        name : str
            The link name

        Returns
        -------
        Pipe, Pump, or Valve

        """
        return self._link_reg[name]

    ### #
    ### Name lists

    @property
    def node_name_list(self):
        """Get a list of node names"""
        return list(self._node_reg.keys())

    @property
    def junction_name_list(self):
        """Get a list of junction names"""
        return [name for name, _ in self.junctions()]

    @property
    def tank_name_list(self):
        """Get a list of tanks names"""
        return [name for name, _ in self.tanks()]

    @property
    def reservoir_name_list(self):
        """Get a list of reservoir names"""
        return [name for name, _ in self.reservoirs()]

    @property
    def link_name_list(self):
        """Get a list of link names"""
        return list(self._link_reg.keys())

    @property
    def pipe_name_list(self):
        """Get a list of pipe names"""
        return [name for name, _ in self.pipes()]

    @property
    def pump_name_list(self):
        """Get a list of pump names"""
        return [name for name, _ in self.pumps()]

    @property
    def valve_name_list(self):
        """Get a list of valve names"""
        return [name for name, _ in self.valves()]

    ### #
    ### Counts

    @property
    def num_nodes(self):
        """The number of nodes"""
        return len(self._node_reg)

    @property
    def num_junctions(self):
        """The number of junctions"""
        return len(self.junction_name_list)

    @property
    def num_tanks(self):
        """The number of tanks"""
        return len(self.tank_name_list)

    @property
    def num_reservoirs(self):
        """The number of reservoirs"""
        return len(self.reservoir_name_list)

    @property
    def num_links(self):
        """The number of links"""
        return len(self._link_reg)

    @property
    def num_pipes(self):
        """The number of pipes"""
        return len(self.pipe_name_list)

    @property
    def num_pumps(self):
        """The number of pumps"""
        return len(self.pump_name_list)

    @property
    def num_valves(self):
        """The number of valves"""
        return len(self.valve_name_list)

    @property
    def num_sources(self):
        """The number of source junctions"""
        return len(self._sources)

    ### #
    ### Helper functions

    def describe(self, level=0):
        """
        Describe number of components in the network model

        Parameters
        ----------
        level : int (0 or 1)

           * Level 0 returns the number of Nodes, Links, and Sources.
           * Level 1 includes information from Level 0 but
             divides Nodes into Junctions, Tanks, and Reservoirs, and
             divides Links into Pipes, Pumps, and Valves.

        Returns
        -------
        A dictionary with component counts
        """
        d = {
            "Nodes": self.num_nodes,
            "Links": self.num_links,
            "Sources": self.num_sources,
        }

        if level >= 1:
            d["Nodes"] = {"Junctions": self.num_junctions, "Tanks": self.num_tanks, "Reservoirs": self.num_reservoirs}
            d["Links"] = {"Pipes": self.num_pipes, "Pumps": self.num_pumps, "Valves": self.num_valves}

        return d

    def to_dict(self):
        """Dictionary representation of the water network model

        Returns
        -------
        dict
        """
        from wudesim.network.io import to_dict
        return to_dict(self)

    def to_graph(self):
        """
        Convert a WaterNetworkModel into a networkx MultiDiGraph

        Returns
        --------
        networkx MultiDiGraph
        """
        from wudesim.network.io import to_graph
        return to_graph(self)

    def query_node_attribute(self, attribute, operation=None, value=None, node_type=None):
        """
        Query node attributes, for example get all junctions with elevation <= threshold

        Parameters
        ----------
        attribute: str
            Node attribute.

        operation: numpy operator
            Numpy operator, options include
            :obj:`numpy.greater`,
            :obj:`numpy.greater_equal`,
            :obj:`numpy.less`,
            :obj:`numpy.less_equal`,
            :obj:`numpy.equal`,
            :obj:`numpy.not_equal`.

        value: float or int
            Threshold

        node_type: Node type
            :class:`~wudesim.network.elements.Junction`,
            :class:`~wudesim.network.elements.Reservoir`,
            :class:`~wudesim.network.elements.Tank`, or None. Default = None.

        Returns
        -------
        :class:`pandas.Series` that contains the attribute that satisfies the operation threshold for a given node_type.

        Notes
        -----
        If operation and value are both None, the :class:`pandas.Series` will contain the attributes
        for all nodes with the specified attribute.

        """
        node_attribute_dict = {}
        for name, node in self.nodes(node_type):
            try:
                node_attribute = getattr(node, attribute)
            except AttributeError:
                continue
            if operation is None and value is None:
                node_attribute_dict[name] = node_attribute
            elif operation(node_attribute, value):
                node_attribute_dict[name] = node_attribute
        return pd.Series(node_attribute_dict, dtype=object if not node_attribute_dict else None)

    def query_link_attribute(self, attribute, operation=None, value=None, link_type=None):
        """
        Query link attributes, for example get all pipe diameters > threshold

        Parameters
        ----------
        attribute: str
            Link attribute

        operation: numpy operator
            Numpy operator, options include
            :obj:`numpy.greater`,
            :obj:`numpy.greater_equal`,
            :obj:`numpy.less`,
            :obj:`numpy.less_equal`,
            :obj:`numpy.equal`,
            :obj:`numpy.not_equal`.

        value: float or int
            Threshold

        link_type: Link type
            :class:`~wudesim.network.elements.Pipe`,
            :class:`~wudesim.network.elements.Pump`,
            :class:`~wudesim.network.elements.Valve`, or None. Default = None.

        Returns
        -------
        :class:`pandas.Series` that contains the attribute that satisfies the operation threshold for a given link_type.

        """
        link_attribute_dict = {}
        for name, link in self.links(link_type):
            try:
                link_attribute = getattr(link, attribute)
            except AttributeError:
                continue
            if operation is None and value is None:
                link_attribute_dict[name] = link_attribute
            elif operation(link_attribute, value):
                link_attribute_dict[name] = link_attribute
        return pd.Series(link_attribute_dict, dtype=object if not link_attribute_dict else None)
