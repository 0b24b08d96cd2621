"""
The wudesim.network.base module includes base classes for network elements.

.. rubric:: Contents

.. autosummary::

    Node
    Link
    NodeType
    LinkType

"""
import abc
import enum
import logging

logger = logging.getLogger(__name__)


class NodeType(enum.IntEnum):
    """
    Enum class for node types.

    .. rubric:: Enum Members

    .. autosummary::

        Junction
        Reservoir
        Tank


    """
    Junction = 0  #: node is a junction
    Reservoir = 1  #: node is a reservoir
    Tank = 2  #: node is a tank

    def __str__(self):
        return self.name


class LinkType(enum.IntEnum):
    """
    Enum class for link types.

    .. rubric:: Enum Members

    .. autosummary::

        Pipe
        Pump
        Valve


    """
    Pipe = 1  #: link is a pipe
    Pump = 2  #: link is a pump
    Valve = 3  #: link is a valve

    def __str__(self):
        return self.name


class Node(abc.ABC):
    """Base class for nodes.

    For details about the different subclasses, see one of the following:
    :class:`~wudesim.network.elements.Junction`,
    :class:`~wudesim.network.elements.Tank`, and
    :class:`~wudesim.network.elements.Reservoir`


    .. rubric:: Constructor

    This is an abstract class and should not be instantiated directly.

    Parameters
    -----------
    name : string
        Name of the node (must be unique among nodes of all types)

    """
    _base_attributes = ['name']

    def __init__(self, name):
        self._name = str(name)

    def _compare(self, other):
        """
        Comparison function

        Parameters
        ----------
        other : Node
            object to compare with

        Returns
        -------
        bool
            is these the same items
        """
        if not type(self) == type(other):
            return False
        for k in self._base_attributes:
            if getattr(self, k) != getattr(other, k):
                return False
        return True

    def __str__(self):
        return self._name

    def __repr__(self):
        return "<{} '{}'>".format(self.__class__.__name__, self._name)

    @property
    @abc.abstractmethod
    def node_type(self):
        """NodeType: The node type"""

    @property
    def name(self):
        """str: The name of the node (read only)"""
        return self._name

    def to_dict(self):
        """Dictionary representation of the node"""
        d = {'node_type': str(self.node_type)}
        for k in self._base_attributes:
            d[k] = getattr(self, k)
        return d


class Link(abc.ABC):
    """Base class for links.

    For details about the different subclasses, see one of the following:
    :class:`~wudesim.network.elements.Pipe`,
    :class:`~wudesim.network.elements.Pump`, and
    :class:`~wudesim.network.elements.Valve`


    .. rubric:: Constructor

    This is an abstract class and should not be instantiated directly.

    Parameters
    -----------
    link_name : string
        Name of the link
    start_node_name : string
        Name of the start node
    end_node_name : string
        Name of the end node

    """
    _base_attributes = ['name', 'start_node_name', 'end_node_name']

    def __init__(self, link_name, start_node_name, end_node_name):
        self._link_name = str(link_name)
        self._start_node_name = str(start_node_name)
        self._end_node_name = str(end_node_name)

    def _compare(self, other):
        """
        Parameters
        ----------
        other: Link

        Returns
        -------
        bool
        """
        if not type(self) == type(other):
            return False
        for k in self._base_attributes:
            if getattr(self, k) != getattr(other, k):
                return False
        return True

    def __str__(self):
        return self._link_name

    def __repr__(self):
        return "<{} '{}' from '{}' to '{}'>".format(self.__class__.__name__, self._link_name,
                                                   self._start_node_name, self._end_node_name)

    @property
    @abc.abstractmethod
    def link_type(self):
        """LinkType: The link type"""

    @property
    def name(self):
        """str: The link name (read-only)"""
        return self._link_name

    @property
    def start_node_name(self):
        """str: The name of the start node (read only)"""
        return self._start_node_name

    @property
    def end_node_name(self):
        """str: The name of the end node (read only)"""
        return self._end_node_name

    def to_dict(self):
        """Dictionary representation of the link"""
        d = {'link_type': str(self.link_type)}
        for k in self._base_attributes:
            d[k] = getattr(self, k)
        return d
