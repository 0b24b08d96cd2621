# coding: utf-8

"""
The wudesim.network.io module includes functions that create a water network
model from an EPANET INP file and convert the model to other data formats.

.. rubric:: Contents

.. autosummary::

    read_inpfile
    load_inpfile
    to_dict
    to_graph
    write_json

"""
import logging
import json
import networkx as nx

import wudesim.epanet
from wudesim.epanet.exceptions import EpanetException

logger = logging.getLogger(__name__)


def read_inpfile(filename, append=None):
    """
    Create a WaterNetworkModel from an EPANET INP file

    Parameters
    ----------
    filename : string
        Name of the INP file.
    append : WaterNetworkModel or None, optional
        Existing WaterNetworkModel to fill.  If None, a new WaterNetworkModel
        is created.

    Returns
    -------
    WaterNetworkModel

    Raises
    ------
    EpanetException
        If the file cannot be read or does not describe a usable network

    """
    inpfile = wudesim.epanet.InpFile()
    wn = inpfile.read(filename, wn=append)

    return wn


def load_inpfile(filename, wn):
    """
    Fill a WaterNetworkModel from an EPANET INP file and report a status code

    The model is only modified when the file is loaded successfully. On
    failure the reason is logged and the model must not be used.

    Parameters
    ----------
    filename : string
        Name of the INP file.
    wn : WaterNetworkModel
        The model to fill

    Returns
    -------
    int
        0 on success, 1 on failure

    """
    try:
        read_inpfile(filename, append=wn)
    except EpanetException as e:
        logger.error('%s: %s', filename, e)
        return 1
    return 0


def to_dict(wn) -> dict:
    """
    Convert a WaterNetworkModel into a dictionary

    Parameters
    ----------
    wn : WaterNetworkModel
        Water network model

    Returns
    -------
    dict
        Dictionary representation of the WaterNetworkModel

    """
    from wudesim import __version__

    d = dict(
        version="wudesim-{}".format(__version__),
        comment="WaterNetworkModel - all values given in {} units".format(
            "SI" if wn.si_units else "INP file"),
        name=wn.name,
        options=wn.options.to_dict(),
        nodes=[node.to_dict() for name, node in wn.nodes()],
        links=[link.to_dict() for name, link in wn.links()],
        sources=list(wn.sources),
    )
    return d


def to_graph(wn):
    """
    Convert a WaterNetworkModel into a networkx MultiDiGraph

    Nodes carry a ``type`` attribute; each pipe, pump and valve becomes an
    edge keyed by the link name, from its start node to its end node.

    Parameters
    ----------
    wn : WaterNetworkModel
        Water network model

    Returns
    --------
    networkx MultiDiGraph
    """
    G = nx.MultiDiGraph()

    for name, node in wn.nodes():
        G.add_node(name, type=node.node_type)

    for name, link in wn.links():
        G.add_edge(link.start_node_name, link.end_node_name, key=name, type=link.link_type)

    return G


def write_json(wn, path_or_buf, **kw_json,):
    """
    Write the WaterNetworkModel to a JSON file

    Parameters
    ----------
    path_or_buf : str or IO stream
        Name of the file or file pointer
    kw_json : keyword arguments
        Arguments to pass directly to `json.dump`

    """
    if isinstance(path_or_buf, str):
        with open(path_or_buf, "w") as fout:
            json.dump(to_dict(wn), fout, **kw_json)
    else:
        json.dump(to_dict(wn), path_or_buf, **kw_json)
