"""
The wudesim.network.options module includes the options read from the
[OPTIONS], [TIMES], and [REACTIONS] sections of an INP file.

.. rubric:: Classes

.. autosummary::
    :nosignatures:

    Options
    HydraulicOptions
    QualityOptions
    TimeOptions
    ReactionOptions
    HourMinute

"""
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)


def _float_or_None(value):
    """Converts a value to a float, but doesn't crash for values of None"""
    if value is not None:
        return float(value)
    return None


def _int_or_None(value):
    """Converts a value to an int, but doesn't crash for values of None"""
    if value is not None:
        return int(value)
    return None


class HourMinute(namedtuple('HourMinute', ['hours', 'minutes'])):
    """
    A time span given as whole hours plus minutes, as written in the
    [TIMES] section (e.g., ``48:00``).

    >>> HourMinute(1, 30).total_minutes
    90
    """
    __slots__ = ()

    def __new__(cls, hours=0, minutes=0):
        return super(HourMinute, cls).__new__(cls, int(hours), int(minutes))

    @classmethod
    def factory(cls, val):
        if isinstance(val, cls):
            return val
        elif isinstance(val, (list, tuple)):
            return cls(*val)
        elif val is None:
            return cls()
        raise ValueError('Unknown type for %s.factory: %s' % (cls.__name__, type(val)))

    @property
    def total_minutes(self):
        """int: The span in minutes"""
        return self.hours * 60 + self.minutes

    @property
    def total_seconds(self):
        """int: The span in seconds"""
        return self.total_minutes * 60

    def __str__(self):
        return '{:d}:{:02d}'.format(self.hours, self.minutes)


class _OptionsBase(object):
    @classmethod
    def factory(cls, val):
        """Create an options object based on passing in an instance of the object, a dict, or a tuple"""
        if isinstance(val, cls):
            return val
        elif isinstance(val, dict):
            return cls(**val)
        elif isinstance(val, (list, tuple)):
            return cls(*val)
        elif val is None:
            return cls()
        raise ValueError('Unknown type for %s.factory: %s' % (cls.__name__, type(val)))

    def __str__(self):
        return "{}({})".format(self.__class__.__name__, ", ".join(["{}={}".format(k, repr(v)) for k, v in self.__dict__.items()]))
    __repr__ = __str__

    def __iter__(self):
        for k, v in self.__dict__.items():
            if isinstance(v, _OptionsBase):
                yield k, dict(v)
            elif isinstance(v, HourMinute):
                yield k, tuple(v)
            else:
                yield k, v

    def __getitem__(self, index):
        return self.__dict__[index]

    def __eq__(self, other):
        if other is None: return False
        if not hasattr(other, '__dict__'): return False
        for k in self.__dict__.keys():
            if not self.__dict__[k] == other.__dict__[k]: return False
        return True


class HydraulicOptions(_OptionsBase):
    """
    Options related to hydraulics and units, from the EPANET "[OPTIONS]" section.

    Parameters
    ----------
    inpfile_units : str
        Flow unit code given by the UNITS option, by default "GPM".

    viscosity : float
        Kinematic viscosity of the fluid relative to water at 20 deg C,
        by default 1.0.

    flow_unit_conv : float
        Factor converting flows in `inpfile_units` to cubic meters per second.
        Set when the units are resolved; by default ``None``.

    unit_sys : int
        0 for US customary units, 1 for metric units. Set when the units
        are resolved; by default ``None``.

    """
    def __init__(self,
                 inpfile_units: str = 'GPM',
                 viscosity: float = 1.0,
                 flow_unit_conv: float = None,
                 unit_sys: int = None):
        self.inpfile_units = inpfile_units
        self.viscosity = viscosity
        self.flow_unit_conv = flow_unit_conv
        self.unit_sys = unit_sys

    def __setattr__(self, name, value):
        if name == 'inpfile_units':
            value = str.upper(value)
        elif name == 'viscosity':
            try:
                value = float(value)
            except ValueError:
                raise ValueError('%s must be a number' % name)
        elif name == 'flow_unit_conv':
            try:
                value = _float_or_None(value)
            except ValueError:
                raise ValueError('%s must be a number or None' % name)
        elif name == 'unit_sys':
            if value not in (None, 0, 1):
                raise ValueError('unit_sys must be 0 (US customary), 1 (metric) or None')
            value = _int_or_None(value)
        else:
            raise AttributeError('%s is not a valid attribute of HydraulicOptions' % name)
        self.__dict__[name] = value


class QualityOptions(_OptionsBase):
    """
    Options related to water quality modeling. These options come from
    the "[OPTIONS]" section of an EPANET INP file.

    Parameters
    ----------
    parameter : str
        Type of water quality analysis.  Options are "NONE", "CHEMICAL", "AGE", and
        "TRACE", by default "NONE".

    chemical_name : str
        Chemical name for "CHEMICAL" analysis, by default ``None``.

    inpfile_units : str
        Concentration units given after the chemical name, by default "mg/L".

    diffusivity : float
        Molecular diffusivity of the chemical relative to chlorine at 20 deg C,
        by default 1.0.

    """
    def __init__(self,
                 parameter: str = 'NONE',
                 chemical_name: str = None,
                 inpfile_units: str = 'mg/L',
                 diffusivity: float = 1.0):
        self.parameter = parameter
        self.chemical_name = chemical_name
        self.inpfile_units = inpfile_units
        self.diffusivity = diffusivity

    def __setattr__(self, name, value):
        if name == 'parameter':
            value = str.upper(value)
            if value not in ['NONE', 'CHEMICAL', 'AGE', 'TRACE']:
                raise ValueError('parameter must be one of NONE, CHEMICAL, AGE or TRACE')
        elif name == 'diffusivity':
            try:
                value = float(value)
            except ValueError:
                raise ValueError('%s must be a number' % name)
        elif name not in ['chemical_name', 'inpfile_units']:
            raise AttributeError('%s is not a valid attribute of QualityOptions' % name)
        self.__dict__[name] = value


class TimeOptions(_OptionsBase):
    """
    Options related to simulation timing, from the EPANET "[TIMES]" section.
    Every span is an :class:`HourMinute`.

    Parameters
    ----------
    duration : HourMinute
        Simulation duration, by default 0:00.

    hydraulic_timestep : HourMinute
        Hydraulic timestep, by default 0:00.

    quality_timestep : HourMinute
        Water quality timestep, by default 0:00. A zero quality timestep is
        replaced by one tenth of the hydraulic timestep when the section is read.

    report_timestep : HourMinute
        Reporting timestep, by default 0:00.

    report_start : HourMinute
        Start time of the report from the start of the simulation, by default 0:00.

    n_steps : int
        Number of reporting steps from `report_start` to `duration`, derived
        when the section is read; by default ``None``.

    """
    _time_attributes = ['duration', 'hydraulic_timestep', 'quality_timestep',
                        'report_timestep', 'report_start']

    def __init__(self,
                 duration: HourMinute = None,
                 hydraulic_timestep: HourMinute = None,
                 quality_timestep: HourMinute = None,
                 report_timestep: HourMinute = None,
                 report_start: HourMinute = None,
                 n_steps: int = None):
        self.duration = duration
        self.hydraulic_timestep = hydraulic_timestep
        self.quality_timestep = quality_timestep
        self.report_timestep = report_timestep
        self.report_start = report_start
        self.n_steps = n_steps

    def __setattr__(self, name, value):
        if name in self._time_attributes:
            try:
                value = HourMinute.factory(value)
            except (TypeError, ValueError):
                raise ValueError('%s must be an (hours, minutes) pair' % name)
        elif name == 'n_steps':
            try:
                value = _int_or_None(value)
            except ValueError:
                raise ValueError('%s must be an integer or None' % name)
        else:
            raise AttributeError('%s is not a valid attribute in TimeOptions' % name)
        self.__dict__[name] = value


class ReactionOptions(_OptionsBase):
    """
    Options related to water quality reactions.
    From the EPANET "[REACTIONS]" options.

    Parameters
    ----------
    bulk_order : float
        Order of reaction occurring in the bulk fluid, by default 1.0.

    wall_order : float
        Order of reaction occurring at the pipe wall; must be either 0 or 1, by default 1.0.

    bulk_coeff : float
        Global reaction coefficient for bulk fluid, by default 0.0.

    wall_coeff : float
        Global reaction coefficient for pipe walls, by default 0.0.

    limiting_potential : float
        Specifies that reaction rates are proportional to the difference
        between the current concentration and some limiting potential value,
        by default ``None`` (off).


    .. note::

        Coefficients hold INP file units (per day) when read and per-second
        units once the network is converted to SI units.

    """
    def __init__(self,
                 bulk_order: float = 1.0,
                 wall_order: float = 1.0,
                 bulk_coeff: float = 0.0,
                 wall_coeff: float = 0.0,
                 limiting_potential: float = None):
        self.bulk_order = bulk_order
        self.wall_order = wall_order
        self.bulk_coeff = bulk_coeff
        self.wall_coeff = wall_coeff
        self.limiting_potential = limiting_potential

    def __setattr__(self, name, value):
        if name not in ['bulk_order', 'wall_order', 'bulk_coeff',
                        'wall_coeff', 'limiting_potential']:
            raise AttributeError('%s is not a valid attribute of ReactionOptions' % name)
        if name != 'limiting_potential':
            try:
                value = float(value)
            except ValueError:
                raise ValueError('%s must be a number' % name)
        else:
            try:
                value = _float_or_None(value)
            except ValueError:
                raise ValueError('%s must be a number or None' % name)
        self.__dict__[name] = value


class Options(_OptionsBase):
    """
    Water network model options class.

    Parameters
    ----------
    hydraulic : HydraulicOptions
        Contains flow units, the resolved unit system, and viscosity

    quality : QualityOptions
        Contains water quality analysis options

    time : TimeOptions
        Contains all timing options

    reaction : ReactionOptions
        Contains chemical reaction parameters

    """
    def __init__(self,
                 hydraulic: HydraulicOptions = None,
                 quality: QualityOptions = None,
                 time: TimeOptions = None,
                 reaction: ReactionOptions = None):
        self.hydraulic = HydraulicOptions.factory(hydraulic)
        self.quality = QualityOptions.factory(quality)
        self.time = TimeOptions.factory(time)
        self.reaction = ReactionOptions.factory(reaction)

    def __setattr__(self, name, value):
        if name == 'hydraulic':
            if not isinstance(value, (HydraulicOptions, dict, tuple, list)):
                raise ValueError('hydraulic must be a HydraulicOptions or convertable object')
            value = HydraulicOptions.factory(value)
        elif name == 'quality':
            if not isinstance(value, (QualityOptions, dict, tuple, list)):
                raise ValueError('quality must be a QualityOptions or convertable object')
            value = QualityOptions.factory(value)
        elif name == 'time':
            if not isinstance(value, (TimeOptions, dict, tuple, list)):
                raise ValueError('time must be a TimeOptions or convertable object')
            value = TimeOptions.factory(value)
        elif name == 'reaction':
            if not isinstance(value, (ReactionOptions, dict, tuple, list)):
                raise ValueError('reaction must be a ReactionOptions or convertable object')
            value = ReactionOptions.factory(value)
        else:
            raise ValueError('%s is not a valid member of Options' % name)
        self.__dict__[name] = value

    def to_dict(self):
        """Dictionary representation of the options"""
        return dict(self)
