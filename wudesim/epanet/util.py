"""
The wudesim.epanet.util module contains unit conversion utilities based on EPANET units.
"""
from __future__ import annotations

import copy
import enum
import logging

import numpy as np

from .exceptions import ENValueError

logger = logging.getLogger(__name__)

__all__ = [
    "UnitSystem",
    "FlowUnits",
    "QualType",
    "HydParam",
    "QualParam",
    "to_si",
    "convert_network",
]

SECONDS_PER_DAY = 86400.0
FEET_TO_METERS = 0.3048
INCHES_TO_METERS = 0.0254
MILLIMETERS_TO_METERS = 0.001


class UnitSystem(enum.IntEnum):
    """The measurement convention implied by an EPANET flow unit.

    .. rubric:: Enum Members

    ==============  ==================================================
    :attr:`~US`     US customary units (feet, inches); flag value 0
    :attr:`~SI`     Metric units (meters, millimeters); flag value 1
    ==============  ==================================================

    """
    US = 0
    SI = 1


class FlowUnits(enum.Enum):
    r"""EPANET flow units with their conversion factor and unit system.

    Each member value is a ``(factor, unit_system)`` tuple, where ``factor``
    converts a flow in the member's units to :math:`\rm m^3\,/\,s`.

    .. rubric:: Enum Members

    ==============  ====================================  ========================
    :attr:`~CFS`    :math:`\rm ft^3\,/\,s`                :attr:`is_traditional`
    :attr:`~GPM`    :math:`\rm gal\,/\,min`               :attr:`is_traditional`
    :attr:`~MGD`    :math:`\rm 10^6\,gal\,/\,day`         :attr:`is_traditional`
    :attr:`~IMGD`   :math:`\rm 10^6\,Imp.\,gal\,/\,day`   :attr:`is_traditional`
    :attr:`~AFD`    :math:`\rm acre\cdot\,ft\,/\,day`     :attr:`is_traditional`
    :attr:`~LPS`    :math:`\rm L\,/\,s`                   :attr:`is_metric`
    :attr:`~LPM`    :math:`\rm L\,/\,min`                 :attr:`is_metric`
    :attr:`~MLD`    :math:`\rm ML\,/\,day`                :attr:`is_metric`
    :attr:`~CMH`    :math:`\rm m^3\,\,hr`                 :attr:`is_metric`
    :attr:`~CMD`    :math:`\rm m^3\,/\,day`               :attr:`is_metric`
    ==============  ====================================  ========================

    Examples
    --------
    >>> FlowUnits.LPS.factor
    0.001
    >>> FlowUnits.from_token('gpm').unit_system
    <UnitSystem.US: 0>
    >>> int(FlowUnits.CMH.unit_system)
    1

    """
    CFS = (0.028316847, UnitSystem.US)
    GPM = (0.0000630901964, UnitSystem.US)
    MGD = (0.043812636574, UnitSystem.US)
    IMGD = (0.052616782407, UnitSystem.US)
    AFD = (0.014276410185, UnitSystem.US)
    LPS = (0.001, UnitSystem.SI)
    LPM = (0.000016666666667, UnitSystem.SI)
    MLD = (0.0115740741, UnitSystem.SI)
    CMH = (0.00027777777778, UnitSystem.SI)
    CMD = (0.000011574074074, UnitSystem.SI)

    def __str__(self):
        """Convert to a string for INP files."""
        return self.name

    @classmethod
    def from_token(cls, token):
        """Resolve a flow unit code from an INP file, ignoring case.

        Parameters
        ----------
        token : str
            The unit code, e.g., ``'GPM'`` or ``'LPS'``

        Returns
        -------
        FlowUnits

        Raises
        ------
        ENValueError
            If the code is not one of the ten EPANET flow units (error 213)
        """
        try:
            return cls[str(token).upper()]
        except KeyError:
            raise ENValueError(213, token) from None

    @property
    def factor(self):
        r"""float: The conversion factor to convert flows into :math:`m^3\,s^{-1}`."""
        return self.value[0]

    @property
    def unit_system(self):
        """UnitSystem: The unit system governing lengths and diameters."""
        return self.value[1]

    @property
    def is_traditional(self):
        """bool: True if flow unit is a US Customary (traditional) unit.

        Examples
        --------
        >>> FlowUnits.MGD.is_traditional
        True
        >>> FlowUnits.MLD.is_traditional
        False

        """
        return self.unit_system is UnitSystem.US

    @property
    def is_metric(self):
        """bool: True if flow unit is an SI Derived (metric) unit.

        Examples
        --------
        >>> FlowUnits.MGD.is_metric
        False
        >>> FlowUnits.MLD.is_metric
        True

        """
        return self.unit_system is UnitSystem.SI


class QualType(enum.Enum):
    """Provide the EPANET water quality simulation mode.

    .. rubric:: Enum Members

    ================  =========================================================================
    :attr:`~none`     Do not perform water quality simulation.
    :attr:`~Chem`     Do chemical transport simulation.
    :attr:`~Age`      Do water age simulation.
    :attr:`~Trace`    Do a tracer test (results in percentage of water is from trace node).
    ================  =========================================================================

    """

    none = 0
    Chem = 1
    Age = 2
    Trace = 3

    def __str__(self):
        return self.name

    @classmethod
    def from_tag(cls, tag):
        """Classify the first token of an INP ``QUALITY`` option.

        Any tag other than NONE, AGE, or TRACE names a chemical.
        """
        if tag is None:
            return cls.none
        key = str(tag).upper()
        if key == 'NONE':
            return cls.none
        elif key == 'AGE':
            return cls.Age
        elif key == 'TRACE':
            return cls.Trace
        return cls.Chem


def _as_array(data):
    original_data_type = None
    data_keys = None
    if isinstance(data, dict):
        original_data_type = 'dict'
        data_keys = list(data.keys())
        data = np.array(list(data.values()), dtype=float)
    elif isinstance(data, (list, tuple)):
        original_data_type = 'list'
        data = np.array(data, dtype=float)
    return data, original_data_type, data_keys


def _restore_type(data, original_data_type, data_keys):
    if original_data_type == 'dict':
        data = dict(zip(data_keys, data.tolist()))
    elif original_data_type == 'list':
        data = data.tolist()
    return data


class HydParam(enum.Enum):
    u"""EPANET hydraulic parameters that are converted when loading a network.

    .. rubric:: Enum Members

    ==========================  ===================================================================
    :attr:`~Length`             Pipe length; feet for US units, meters for metric units
    :attr:`~PipeDiameter`       Pipe diameter; inches for US units, millimeters for metric units
    ==========================  ===================================================================

    """
    Length = 2
    PipeDiameter = 3

    def _to_si(self, flow_units, data):
        data, original_data_type, data_keys = _as_array(data)

        if self is HydParam.Length:
            if flow_units.is_traditional:
                data = data * FEET_TO_METERS  # ft to m
        elif self is HydParam.PipeDiameter:
            if flow_units.is_traditional:
                data = data * INCHES_TO_METERS  # in to m
            else:
                data = data * MILLIMETERS_TO_METERS  # mm to m

        return _restore_type(data, original_data_type, data_keys)


class QualParam(enum.Enum):
    u"""EPANET water quality parameters that are converted when loading a network.

    Reaction coefficient conversions require the reaction order as well as
    the flow units. See :func:`to_si` for details.

    .. rubric:: Enum Members

    ==========================  ================================================================
    :attr:`~BulkReactionCoeff`  Bulk reaction coefficient, per day
    :attr:`~WallReactionCoeff`  Wall reaction coefficient (req. `reaction_order` to convert)
    ==========================  ================================================================

    """
    BulkReactionCoeff = 36
    WallReactionCoeff = 37

    def _to_si(self, flow_units, data, reaction_order=1):
        data, original_data_type, data_keys = _as_array(data)

        if self is QualParam.BulkReactionCoeff:
            data = data / SECONDS_PER_DAY  # 1/day to 1/s

        elif self is QualParam.WallReactionCoeff:
            if flow_units.is_metric:
                data = data / SECONDS_PER_DAY  # m/day or 1/m2/day to per second
            elif reaction_order == 1:
                data = data * (FEET_TO_METERS / SECONDS_PER_DAY)  # ft/d to m/s
            elif reaction_order == 0:
                data = data / (FEET_TO_METERS ** 2 * SECONDS_PER_DAY)  # 1/ft2/d to 1/m2/s
            else:
                raise ENValueError(213, reaction_order, 'wall reaction order must be 0 or 1')

        return _restore_type(data, original_data_type, data_keys)


def to_si(from_units: FlowUnits, data, param, reaction_order: int = 1):
    """Convert an EPANET parameter from INP file units to SI standard units.

    Parameters
    ----------
    from_units : :class:`~FlowUnits`
        The EPANET flow units (and therefore units system) to use for conversion
    data : float, array-like, dict
        The data to be converted
    param : :class:`~HydParam` or :class:`~QualParam`
        The parameter type for the data
    reaction_order : int, optional
        For wall reaction coefficients, what is the reaction order?

    Returns
    -------
    float, array-like, or dict
        The data values convert into SI standard units

    Examples
    --------
    >>> to_si(FlowUnits.LPS, [100.0, 50.0], HydParam.Length)
    [100.0, 50.0]
    >>> to_si(FlowUnits.LPS, {'p1': 1000.0}, HydParam.PipeDiameter)
    {'p1': 1.0}
    >>> to_si(FlowUnits.GPM, -86400.0, QualParam.BulkReactionCoeff)
    -1.0

    """
    if isinstance(param, HydParam):
        return param._to_si(from_units, data)
    elif isinstance(param, QualParam):
        return param._to_si(from_units, data, reaction_order)
    else:
        raise RuntimeError("Invalid parameter: %s" % param)


def convert_network(flow_units: FlowUnits, wn):
    """Convert a network loaded in INP file units to SI units.

    The input model is left untouched; a converted copy is returned. Pipe
    lengths and diameters become meters, and the global bulk and wall
    reaction coefficients become per-second rates.

    Parameters
    ----------
    flow_units : :class:`~FlowUnits`
        The flow units resolved from the ``[OPTIONS]`` section
    wn : :class:`~wudesim.network.model.WaterNetworkModel`
        A network holding raw INP file values

    Returns
    -------
    :class:`~wudesim.network.model.WaterNetworkModel`
        A copy of `wn` in SI units
    """
    if wn.si_units:
        raise RuntimeError('Network %s has already been converted to SI units' % wn.name)
    converted = copy.deepcopy(wn)

    pipe_names = converted.pipe_name_list
    if len(pipe_names) > 0:
        lengths = to_si(flow_units, [converted.get_link(name).length for name in pipe_names],
                        HydParam.Length)
        diameters = to_si(flow_units, [converted.get_link(name).diameter for name in pipe_names],
                          HydParam.PipeDiameter)
        for name, length, diameter in zip(pipe_names, lengths, diameters):
            pipe = converted.get_link(name)
            pipe.length = length
            pipe.diameter = diameter

    reaction = converted.options.reaction
    reaction.bulk_coeff = to_si(flow_units, reaction.bulk_coeff, QualParam.BulkReactionCoeff)
    reaction.wall_coeff = to_si(flow_units, reaction.wall_coeff, QualParam.WallReactionCoeff,
                                reaction_order=reaction.wall_order)

    converted.si_units = True
    logger.debug('Converted %d pipes from %s to SI units', len(pipe_names), flow_units)
    return converted
