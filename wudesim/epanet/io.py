"""
The wudesim.epanet.io module contains methods for reading EPANET input files
into a water network model for water quality analysis.

.. rubric:: Contents

.. autosummary::

    InpFile
    read_lines

----


"""
import io
import logging
import re
from collections import OrderedDict, namedtuple

from wudesim.network.model import WaterNetworkModel
from wudesim.network.options import HourMinute

from .exceptions import EpanetException, ENSyntaxError, ENKeyError, ENValueError
from .util import FlowUnits, QualType, convert_network

logger = logging.getLogger(__name__)

_INP_SECTIONS = ['[TITLE]', '[JUNCTIONS]', '[RESERVOIRS]', '[TANKS]',
                 '[PIPES]', '[PUMPS]', '[VALVES]', '[EMITTERS]',
                 '[CURVES]', '[PATTERNS]', '[ENERGY]', '[STATUS]',
                 '[CONTROLS]', '[RULES]', '[DEMANDS]',
                 '[QUALITY]', '[REACTIONS]', '[SOURCES]', '[MIXING]',
                 '[OPTIONS]', '[TIMES]', '[REPORT]',
                 '[COORDINATES]', '[VERTICES]', '[LABELS]', '[BACKDROP]', '[TAGS]',
                 '[END]']

_CLOCK = re.compile(r'^(\d+)(?:\s*[^\s\d]\s*(\d+))?')

# keyword: text searched for in a line
# field: name of the option the rule sets
# labels: number of leading label tokens before the value
_Rule = namedtuple('_Rule', ['keyword', 'field', 'labels'])

_OPTION_RULES = [_Rule('VISCOSITY', 'viscosity', 1),
                 _Rule('DIFFUSIVITY', 'diffusivity', 1),
                 _Rule('UNITS', 'units', 1),
                 _Rule('QUALITY', 'quality', 1)]

_TIME_RULES = [_Rule('DURATION', 'duration', 1),
               _Rule('HYDRAULIC TIMESTEP', 'hydraulic_timestep', 2),
               _Rule('QUALITY TIMESTEP', 'quality_timestep', 2),
               _Rule('REPORT TIMESTEP', 'report_timestep', 2),
               _Rule('REPORT START', 'report_start', 2)]

_REACTION_RULES = [_Rule('GLOBAL BULK', 'bulk_coeff', 2),
                   _Rule('GLOBAL WALL', 'wall_coeff', 2),
                   _Rule('ORDER BULK', 'bulk_order', 2),
                   _Rule('ORDER WALL', 'wall_order', 2),
                   _Rule('LIMITING POTENTIAL', 'limiting_potential', 2)]


def _split_line(line):
    _vc = line.split(';', 1)
    _cmnt = None
    _vals = None
    if len(_vc) == 1:
        _vals = _vc[0].split()
    elif _vc[0] == '':
        _cmnt = _vc[1]
    else:
        _vals = _vc[0].split()
        _cmnt = _vc[1]
    return _vals, _cmnt


def _matching_rules(rules, text, first_only):
    """Yield the rules whose keyword occurs in `text`, ignoring case"""
    text = text.upper()
    for rule in rules:
        if rule.keyword in text:
            yield rule
            if first_only:
                return


def _to_float(token, lnum=None, line=None):
    try:
        return float(token)
    except ValueError:
        raise ENValueError(202, token, line_num=lnum, line=line) from None


def _require_value(words, rule, lnum, line):
    if len(words) <= rule.labels:
        raise ENSyntaxError(201, 'no value provided for ' + rule.keyword, line_num=lnum, line=line)


def _value_after_labels(words, rule, lnum, line):
    _require_value(words, rule, lnum, line)
    return words[rule.labels]


def _str_clock_to_hour_minute(s, lnum=None, line=None):
    """
    Converts a [TIMES] value of the form ``<hours> <separator> <minutes>``.

    The separator is any single non-digit character, normally ``:``. A
    missing minutes part counts as zero minutes.

    Parameters
    ----------
    s : string
        The text following the label, e.g., '48:00' or '1 : 30'

    Returns
    -------
    HourMinute
    """
    time_tuple = _CLOCK.search(s)
    if not bool(time_tuple):
        raise ENValueError(202, s, line_num=lnum, line=line)
    hours, minutes = time_tuple.groups()
    return HourMinute(int(hours), int(minutes) if minutes is not None else 0)


def read_lines(inp_file):
    """
    Read all lines of a text file.

    Parameters
    ----------
    inp_file : str
        Name of the INP file

    Returns
    -------
    list of str
        The lines of the file, with surrounding whitespace removed
    """
    try:
        with io.open(inp_file, 'r', encoding='utf-8') as f:
            return [line.strip() for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise EpanetException(302, inp_file) from e


def _find_section_boundaries(lines):
    """
    Find the positions of every section header in the file.

    Parameters
    ----------
    lines : list of str
        All lines of the INP file

    Returns
    -------
    list of int
        Sorted indices of the lines containing any recognized header
    """
    index = []
    for header in _INP_SECTIONS:
        for i, line in enumerate(lines):
            if header in line.upper():
                index.append(i)
    index.sort()
    return index


def _extract_section(boundaries, lines, header):
    """
    Get the data lines of one section.

    The body of a section runs from the line after its header up to the
    next header of any kind. Blank lines and comment lines are dropped.

    Parameters
    ----------
    boundaries : list of int
        The sorted header positions from :func:`_find_section_boundaries`
    lines : list of str
        All lines of the INP file
    header : str
        The section header, e.g., '[PIPES]'

    Returns
    -------
    list of (int, str)
        Line number (1-based) and text of each data line. Empty if the
        section does not occur in the file.
    """
    start = None
    for i, line in enumerate(lines):
        if header in line.upper():
            start = i
            break
    if start is None:
        return []
    stop = len(lines)
    for b in boundaries:
        if b > start:
            stop = b
            break
    data = []
    for i in range(start + 1, stop):
        line = lines[i].strip()
        if len(line) == 0 or line.startswith(';'):
            continue
        data.append((i + 1, line))
    return data


class InpFile(object):
    """
    EPANET INP file reader class.

    The reader loads the elements of the network (junctions, tanks,
    reservoirs, pipes, pumps and valves) and the [OPTIONS], [TIMES] and
    [REACTIONS] settings needed for a chemical water quality analysis. The
    network is read in INP file units and then converted to SI units using
    the unit system implied by the flow units.
    """
    def __init__(self):
        self.sections = OrderedDict()
        for sec in _INP_SECTIONS:
            self.sections[sec] = []
        self.boundaries = []
        self.flow_units = None
        self.wn = None

    def read(self, inp_file, wn=None):
        """
        Method to read an EPANET INP file and load data into a water network model object.

        Parameters
        ----------
        inp_file : str
            An EPANET INP input file
        wn : WaterNetworkModel, optional
            Model to fill. A new model is created if None.

        Returns
        -------
        :class:`~wudesim.network.model.WaterNetworkModel`
            A water network model object in SI units

        Raises
        ------
        EpanetException
            If the file cannot be read or does not describe a usable network

        """
        lines = read_lines(inp_file)
        return self.read_lines(lines, wn=wn, name=inp_file)

    def read_lines(self, lines, wn=None, name=None):
        """
        Load a water network model from the lines of an INP file.

        Parameters
        ----------
        lines : list of str
            The ordered lines of the file
        wn : WaterNetworkModel, optional
            Model to fill. A new model is created if None.
        name : str, optional
            Name given to the network, normally the file name

        Returns
        -------
        :class:`~wudesim.network.model.WaterNetworkModel`
            A water network model object in SI units

        """
        lines = list(lines)
        if len(lines) == 0:
            raise EpanetException(311, name)

        self.boundaries = _find_section_boundaries(lines)
        for sec in _INP_SECTIONS:
            self.sections[sec] = _extract_section(self.boundaries, lines, sec)
            if self.sections[sec]:
                logger.debug('%s: %d data lines', sec, len(self.sections[sec]))

        # The network is first read in the units of the file
        self.wn = WaterNetworkModel()
        self.wn.name = name

        ### PIPES
        self._read_pipes()

        ### JUNCTIONS
        self._read_junctions()

        ### TANKS
        self._read_tanks()

        ### RESERVOIRS
        self._read_reservoirs()

        ### PUMPS
        self._read_pumps()

        ### VALVES
        self._read_valves()

        ### OPTIONS
        self._read_options()

        ### TIMES
        self._read_times()

        ### REACTIONS
        self._read_reactions()

        # Lengths, diameters and reaction coefficients depend on the units
        # resolved from [OPTIONS]
        self.flow_units = self._resolve_flow_units()
        converted = convert_network(self.flow_units, self.wn)

        logger.info('Loaded %s: %s', name, converted.describe(level=1))
        if wn is None:
            return converted
        wn._assign_from(converted)
        return wn

    def _add_element(self, add_method, lnum, line, *args):
        try:
            return add_method(*args)
        except ValueError as e:
            raise ENSyntaxError(215, args[0], line_num=lnum, line=line) from e

    def _required_section(self, sec):
        if len(self.sections[sec]) == 0:
            raise ENKeyError(312, sec)
        return self.sections[sec]

    def _read_pipes(self):
        for lnum, line in self._required_section('[PIPES]'):
            current, _ = _split_line(line)
            if not current:
                continue
            if len(current) < 5:
                raise ENSyntaxError(201, 'pipe needs ID, nodes, length and diameter',
                                    line_num=lnum, line=line)
            self._add_element(self.wn.add_pipe, lnum, line,
                              current[0],
                              current[1],
                              current[2],
                              _to_float(current[3], lnum, line),
                              _to_float(current[4], lnum, line))

    def _read_junctions(self):
        for lnum, line in self._required_section('[JUNCTIONS]'):
            current, _ = _split_line(line)
            if not current:
                continue
            if len(current) < 3:
                raise ENSyntaxError(201, 'junction needs ID, elevation and demand',
                                    line_num=lnum, line=line)
            junction = self._add_element(self.wn.add_junction, lnum, line,
                                         current[0],
                                         _to_float(current[1], lnum, line),
                                         _to_float(current[2], lnum, line))
            if junction.is_source:
                self.wn.add_source(junction.name)
        logger.debug('%d source junctions: %s', self.wn.num_sources, self.wn.sources)

    def _read_tanks(self):
        for lnum, line in self.sections['[TANKS]']:
            current, _ = _split_line(line)
            if not current:
                continue
            if len(current) < 2:
                raise ENSyntaxError(201, 'tank needs ID and elevation', line_num=lnum, line=line)
            numbers = [_to_float(v, lnum, line) for v in current[1:7]]
            numbers = numbers + [None] * (6 - len(numbers))
            vol_curve = current[7] if len(current) > 7 else None
            overflow = current[8] if len(current) > 8 else None
            self._add_element(self.wn.add_tank, lnum, line, current[0], *numbers,
                              vol_curve, overflow)

    def _read_reservoirs(self):
        for lnum, line in self.sections['[RESERVOIRS]']:
            current, _ = _split_line(line)
            if not current:
                continue
            if len(current) < 2:
                raise ENSyntaxError(201, 'reservoir needs ID and head', line_num=lnum, line=line)
            pattern = current[2] if len(current) > 2 else None
            self._add_element(self.wn.add_reservoir, lnum, line,
                              current[0], _to_float(current[1], lnum, line), pattern)

    def _read_pumps(self):
        for lnum, line in self.sections['[PUMPS]']:
            current, _ = _split_line(line)
            if not current:
                continue
            if len(current) < 3:
                raise ENSyntaxError(201, 'pump needs ID and nodes', line_num=lnum, line=line)
            self._add_element(self.wn.add_pump, lnum, line, current[0], current[1], current[2])

    def _read_valves(self):
        for lnum, line in self.sections['[VALVES]']:
            current, _ = _split_line(line)
            if not current:
                continue
            if len(current) < 3:
                raise ENSyntaxError(201, 'valve needs ID and nodes', line_num=lnum, line=line)
            self._add_element(self.wn.add_valve, lnum, line, current[0], current[1], current[2])

    def _read_options(self):
        opts = self.wn.options
        seen = set()
        tag = None
        for lnum, line in self.sections['[OPTIONS]']:
            words, _ = _split_line(line)
            if not words:
                continue
            for rule in _matching_rules(_OPTION_RULES, ' '.join(words), first_only=True):
                if rule.field in seen:
                    logger.warning('[OPTIONS] %s given more than once; using line %d',
                                   rule.keyword, lnum)
                seen.add(rule.field)
                value = _value_after_labels(words, rule, lnum, line)
                if rule.field == 'viscosity':
                    opts.hydraulic.viscosity = _to_float(value, lnum, line)
                elif rule.field == 'diffusivity':
                    opts.quality.diffusivity = _to_float(value, lnum, line)
                elif rule.field == 'units':
                    opts.hydraulic.inpfile_units = value
                elif rule.field == 'quality':
                    tag = value
                    if len(words) > rule.labels + 1:
                        opts.quality.inpfile_units = words[rule.labels + 1]

        mode = QualType.from_tag(tag)
        if mode is not QualType.Chem:
            raise ENValueError(313, tag if tag is not None else 'NONE')
        opts.quality.parameter = 'CHEMICAL'
        opts.quality.chemical_name = tag

    def _read_times(self):
        time = self.wn.options.time
        for lnum, line in self.sections['[TIMES]']:
            words, _ = _split_line(line)
            if not words:
                continue
            for rule in _matching_rules(_TIME_RULES, ' '.join(words), first_only=True):
                _require_value(words, rule, lnum, line)
                value = _str_clock_to_hour_minute(' '.join(words[rule.labels:]), lnum, line)
                setattr(time, rule.field, value)

        if time.duration.total_minutes == 0:
            raise EpanetException(314)

        if time.quality_timestep.total_minutes == 0:
            time.quality_timestep = HourMinute(0, time.hydraulic_timestep.total_minutes // 10)

        report_step = time.report_timestep.total_minutes
        if report_step == 0:
            raise ENValueError(213, 'REPORT TIMESTEP ' + str(time.report_timestep))
        n_steps = (time.duration.total_minutes - time.report_start.total_minutes) // report_step + 1
        if n_steps <= 0:
            raise ENValueError(315, n_steps)
        time.n_steps = n_steps

    def _read_reactions(self):
        reaction = self.wn.options.reaction
        for lnum, line in self.sections['[REACTIONS]']:
            words, _ = _split_line(line)
            if not words:
                continue
            for rule in _matching_rules(_REACTION_RULES, ' '.join(words), first_only=False):
                value = _to_float(_value_after_labels(words, rule, lnum, line), lnum, line)
                if rule.field == 'wall_order' and value not in (0.0, 1.0):
                    raise ENValueError(213, value, 'wall reaction order must be 0 or 1',
                                       line_num=lnum, line=line)
                setattr(reaction, rule.field, value)

    def _resolve_flow_units(self):
        hydraulic = self.wn.options.hydraulic
        flow_units = FlowUnits.from_token(hydraulic.inpfile_units)
        hydraulic.flow_unit_conv = flow_units.factor
        hydraulic.unit_sys = int(flow_units.unit_system)
        logger.debug('Flow units %s: factor %g, unit system %d',
                     flow_units, flow_units.factor, hydraulic.unit_sys)
        return flow_units
