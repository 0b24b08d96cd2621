import unittest
from os.path import abspath, dirname, join

import wudesim
from wudesim.epanet.io import InpFile, _find_section_boundaries, _extract_section, \
    _str_clock_to_hour_minute, read_lines
from wudesim.epanet.exceptions import EpanetException, ENSyntaxError, ENKeyError, ENValueError
from wudesim.network.options import HourMinute

testdir = dirname(abspath(str(__file__)))
test_datadir = join(testdir, "networks_for_testing")


def _network_lines(junctions=None, pipes=None, options=None, times=None, reactions=None,
                   extra=None):
    """Build the lines of a small INP file; None keeps the default section"""
    if junctions is None:
        junctions = ["J1 100 1.0", "J2 90 -1.5", "J3 80 2.0"]
    if pipes is None:
        pipes = ["P1 R1 J1 100 12", "P2 J1 J2 200 8", "P3 J2 J3 300 6"]
    if options is None:
        options = ["UNITS GPM", "QUALITY Chlorine mg/L"]
    if times is None:
        times = ["Duration 24:00", "Hydraulic Timestep 1:00", "Report Timestep 1:00",
                 "Report Start 0:00"]
    if reactions is None:
        reactions = []
    lines = ["[TITLE]", "test network", ""]
    if junctions is not False:
        lines += ["[JUNCTIONS]"] + junctions + [""]
    lines += ["[RESERVOIRS]", "R1 120", ""]
    if pipes is not False:
        lines += ["[PIPES]"] + pipes + [""]
    lines += ["[REACTIONS]"] + reactions + [""]
    lines += ["[OPTIONS]"] + options + [""]
    lines += ["[TIMES]"] + times + [""]
    if extra:
        lines += extra
    lines += ["[END]"]
    return lines


class TestSections(unittest.TestCase):
    def setUp(self):
        self.lines = [
            "[TITLE]",            # 0
            "a title",            # 1
            "[PIPES]",            # 2
            "; a comment",        # 3
            "P1 J1 J2 100 12",    # 4
            "",                   # 5
            "P2 J2 J3 200 8",     # 6
            "[JUNCTIONS]",        # 7
            "J1 10 1",            # 8
            "[PIPES_EXTRA]",      # 9
            "[END]",              # 10
        ]

    def test_boundaries_are_global_and_sorted(self):
        boundaries = _find_section_boundaries(self.lines)
        self.assertListEqual(boundaries, [0, 2, 7, 10])

    def test_extract_skips_blank_and_comment_lines(self):
        boundaries = _find_section_boundaries(self.lines)
        data = _extract_section(boundaries, self.lines, "[PIPES]")
        self.assertListEqual(data, [(5, "P1 J1 J2 100 12"), (7, "P2 J2 J3 200 8")])

    def test_extract_stops_at_next_header_of_any_kind(self):
        boundaries = _find_section_boundaries(self.lines)
        data = _extract_section(boundaries, self.lines, "[JUNCTIONS]")
        # [PIPES_EXTRA] is not a recognized header, so it is part of the body
        self.assertListEqual(data, [(9, "J1 10 1"), (10, "[PIPES_EXTRA]")])

    def test_extract_absent_section(self):
        boundaries = _find_section_boundaries(self.lines)
        self.assertListEqual(_extract_section(boundaries, self.lines, "[TANKS]"), [])

    def test_extract_last_section_runs_to_end_of_file(self):
        lines = ["[OPTIONS]", "UNITS LPS", "QUALITY Chlorine mg/L"]
        boundaries = _find_section_boundaries(lines)
        data = _extract_section(boundaries, lines, "[OPTIONS]")
        self.assertEqual(len(data), 2)

    def test_clock_values(self):
        self.assertEqual(_str_clock_to_hour_minute("48:00"), HourMinute(48, 0))
        self.assertEqual(_str_clock_to_hour_minute("1 : 30"), HourMinute(1, 30))
        self.assertEqual(_str_clock_to_hour_minute("12"), HourMinute(12, 0))
        self.assertRaises(ENValueError, _str_clock_to_hour_minute, "abc")


class TestReadUSNetwork(unittest.TestCase):
    @classmethod
    def setUpClass(self):
        inp_file = join(test_datadir, "net_us.inp")
        self.inpfile = InpFile()
        self.wn = self.inpfile.read(inp_file)
        self.raw = self.inpfile.wn

    def test_pipes_in_file_order(self):
        self.assertListEqual(self.wn.pipe_name_list, ["P1", "P2", "P3", "P4", "P5"])
        p2 = self.raw.get_link("P2")
        self.assertEqual(p2.start_node_name, "J2")
        self.assertEqual(p2.end_node_name, "J3")
        self.assertAlmostEqual(p2.length, 5280.0)
        self.assertAlmostEqual(p2.diameter, 8.0)

    def test_pipe_units_converted(self):
        p1 = self.wn.get_link("P1")
        self.assertAlmostEqual(p1.length, 30.48, 6)
        self.assertAlmostEqual(p1.diameter, 0.3048, 6)
        self.assertTrue(self.wn.si_units)
        self.assertFalse(self.raw.si_units)

    def test_junctions_and_sources(self):
        self.assertListEqual(self.wn.junction_name_list, ["J1", "J2", "J3", "J4", "J5"])
        j3 = self.wn.get_node("J3")
        self.assertAlmostEqual(j3.elevation, 695.0)
        self.assertAlmostEqual(j3.base_demand, -1.5)
        self.assertListEqual(self.wn.sources, ["J3", "J5"])
        self.assertNotIn("J4", self.wn.sources)

    def test_tanks_and_reservoirs(self):
        t1 = self.wn.get_node("T1")
        self.assertAlmostEqual(t1.elevation, 850.0)
        self.assertAlmostEqual(t1.init_level, 120.0)
        self.assertAlmostEqual(t1.diameter, 50.5)
        self.assertAlmostEqual(t1.min_vol, 0.0)
        self.assertIsNone(t1.vol_curve)
        r1 = self.wn.get_node("R1")
        self.assertAlmostEqual(r1.base_head, 800.0)
        self.assertIsNone(r1.head_pattern)

    def test_pumps_and_valves(self):
        pump = self.wn.get_link("PU1")
        self.assertEqual(pump.start_node_name, "R1")
        self.assertEqual(pump.end_node_name, "J1")
        valve = self.wn.get_link("V1")
        self.assertEqual(valve.start_node_name, "J2")
        self.assertEqual(valve.end_node_name, "J4")
        self.assertEqual(self.wn.num_links, 7)

    def test_options(self):
        opts = self.wn.options
        self.assertEqual(opts.hydraulic.inpfile_units, "GPM")
        self.assertEqual(opts.hydraulic.unit_sys, 0)
        self.assertAlmostEqual(opts.hydraulic.flow_unit_conv, 0.0000630901964)
        self.assertAlmostEqual(opts.hydraulic.viscosity, 1.1)
        self.assertAlmostEqual(opts.quality.diffusivity, 0.9)
        self.assertEqual(opts.quality.parameter, "CHEMICAL")
        self.assertEqual(opts.quality.chemical_name, "Chlorine")
        self.assertEqual(opts.quality.inpfile_units, "mg/L")

    def test_times(self):
        time = self.wn.options.time
        self.assertEqual(time.duration, HourMinute(24, 0))
        self.assertEqual(time.hydraulic_timestep, HourMinute(1, 0))
        self.assertEqual(time.quality_timestep, HourMinute(0, 5))
        self.assertEqual(time.report_timestep, HourMinute(1, 0))
        self.assertEqual(time.report_start, HourMinute(0, 0))
        self.assertEqual(time.n_steps, 25)

    def test_reactions(self):
        reaction = self.wn.options.reaction
        self.assertAlmostEqual(reaction.bulk_order, 1.0)
        self.assertAlmostEqual(reaction.wall_order, 1.0)
        self.assertAlmostEqual(reaction.limiting_potential, 0.0)
        self.assertAlmostEqual(reaction.bulk_coeff, -0.5 / 86400)
        self.assertAlmostEqual(reaction.wall_coeff, -1 * 0.3048 / 86400)
        # the raw model keeps the INP file values
        self.assertAlmostEqual(self.raw.options.reaction.bulk_coeff, -0.5)


class TestReadMetricNetwork(unittest.TestCase):
    @classmethod
    def setUpClass(self):
        self.wn = wudesim.network.read_inpfile(join(test_datadir, "net_metric.inp"))

    def test_unit_system(self):
        self.assertEqual(self.wn.options.hydraulic.unit_sys, 1)
        self.assertAlmostEqual(self.wn.options.hydraulic.flow_unit_conv, 0.001)

    def test_pipe_units_converted(self):
        l1 = self.wn.get_link("L1")
        self.assertAlmostEqual(l1.length, 100.0)
        self.assertAlmostEqual(l1.diameter, 0.15)
        self.assertAlmostEqual(self.wn.get_link("L2").length, 250.5)

    def test_quality_timestep_default(self):
        time = self.wn.options.time
        self.assertEqual(time.quality_timestep, HourMinute(0, 6))
        self.assertEqual(time.n_steps, 25)

    def test_wall_order_zero(self):
        reaction = self.wn.options.reaction
        self.assertAlmostEqual(reaction.wall_order, 0.0)
        self.assertAlmostEqual(reaction.wall_coeff, -0.5 / 86400)
        self.assertAlmostEqual(reaction.bulk_coeff, -0.3 / 86400)

    def test_sources(self):
        self.assertListEqual(self.wn.sources, ["N2"])


class TestReadLines(unittest.TestCase):
    def read(self, lines):
        return InpFile().read_lines(lines)

    def test_defaults(self):
        wn = self.read(_network_lines())
        self.assertEqual(wn.num_pipes, 3)
        self.assertEqual(wn.num_junctions, 3)
        self.assertListEqual(wn.sources, ["J2"])
        reaction = wn.options.reaction
        self.assertAlmostEqual(reaction.bulk_order, 1.0)
        self.assertAlmostEqual(reaction.wall_order, 1.0)
        self.assertAlmostEqual(reaction.bulk_coeff, 0.0)
        self.assertAlmostEqual(reaction.wall_coeff, 0.0)
        self.assertIsNone(reaction.limiting_potential)

    def test_units_lps_and_chemical(self):
        wn = self.read(_network_lines(options=["UNITS LPS", "QUALITY Chlorine mg/L"]))
        self.assertEqual(wn.options.hydraulic.unit_sys, 1)
        self.assertEqual(wn.options.quality.chemical_name, "Chlorine")

    def test_missing_units_means_gpm(self):
        wn = self.read(_network_lines(options=["QUALITY Fluoride mg/L"]))
        self.assertEqual(wn.options.hydraulic.inpfile_units, "GPM")
        self.assertEqual(wn.options.hydraulic.unit_sys, 0)

    def test_all_flow_units(self):
        expected = {"CFS": 0, "GPM": 0, "MGD": 0, "IMGD": 0, "AFD": 0,
                    "LPS": 1, "LPM": 1, "MLD": 1, "CMH": 1, "CMD": 1}
        for token, unit_sys in expected.items():
            wn = self.read(_network_lines(options=["UNITS " + token, "QUALITY Chlorine mg/L"]))
            self.assertEqual(wn.options.hydraulic.unit_sys, unit_sys)

    def test_unknown_units(self):
        with self.assertRaises(ENValueError) as cm:
            self.read(_network_lines(options=["UNITS XYZ", "QUALITY Chlorine mg/L"]))
        self.assertEqual(cm.exception.code, 213)

    def test_repeated_units_last_wins(self):
        lines = _network_lines(options=["UNITS GPM", "QUALITY Chlorine mg/L", "UNITS CMH"])
        with self.assertLogs("wudesim.epanet.io", level="WARNING"):
            wn = self.read(lines)
        self.assertEqual(wn.options.hydraulic.inpfile_units, "CMH")
        self.assertEqual(wn.options.hydraulic.unit_sys, 1)

    def test_unsupported_quality(self):
        for tag in ["AGE hrs", "NONE", "TRACE J1"]:
            with self.assertRaises(ENValueError) as cm:
                self.read(_network_lines(options=["UNITS GPM", "QUALITY " + tag]))
            self.assertEqual(cm.exception.code, 313)

    def test_missing_quality(self):
        with self.assertRaises(ENValueError) as cm:
            self.read(_network_lines(options=["UNITS GPM"]))
        self.assertEqual(cm.exception.code, 313)

    def test_report_step_count(self):
        times = ["Duration 48:00", "Hydraulic Timestep 1:00", "Report Timestep 2:00",
                 "Report Start 0:00"]
        wn = self.read(_network_lines(times=times))
        self.assertEqual(wn.options.time.n_steps, (48 * 60 - 0) // (2 * 60) + 1)
        self.assertEqual(wn.options.time.quality_timestep.total_minutes, 6)

    def test_report_step_count_rounds_down(self):
        times = ["Duration 10:00", "Report Timestep 3:00", "Report Start 0:30"]
        wn = self.read(_network_lines(times=times))
        self.assertEqual(wn.options.time.n_steps, 4)

    def test_zero_duration(self):
        times = ["Duration 0:00", "Hydraulic Timestep 1:00", "Report Timestep 1:00"]
        with self.assertRaises(EpanetException) as cm:
            self.read(_network_lines(times=times))
        self.assertEqual(cm.exception.code, 314)

    def test_report_start_after_duration(self):
        times = ["Duration 1:00", "Report Timestep 1:00", "Report Start 3:00"]
        with self.assertRaises(ENValueError) as cm:
            self.read(_network_lines(times=times))
        self.assertEqual(cm.exception.code, 315)

    def test_zero_report_step(self):
        times = ["Duration 24:00", "Hydraulic Timestep 1:00"]
        with self.assertRaises(ENValueError) as cm:
            self.read(_network_lines(times=times))
        self.assertEqual(cm.exception.code, 213)

    def test_time_line_first_keyword_wins(self):
        times = ["Duration 6:00 Report Start 2:00", "Report Timestep 1:00"]
        wn = self.read(_network_lines(times=times))
        self.assertEqual(wn.options.time.duration, HourMinute(6, 0))
        self.assertEqual(wn.options.time.report_start, HourMinute(0, 0))
        self.assertEqual(wn.options.time.n_steps, 7)

    def test_option_line_first_keyword_wins(self):
        options = ["Viscosity 1.2 UNITS", "QUALITY Chlorine mg/L"]
        wn = self.read(_network_lines(options=options))
        self.assertAlmostEqual(wn.options.hydraulic.viscosity, 1.2)
        self.assertEqual(wn.options.hydraulic.inpfile_units, "GPM")
        self.assertEqual(wn.options.hydraulic.unit_sys, 0)

    def test_option_keywords_tested_in_rule_order(self):
        # VISCOSITY is tried before DIFFUSIVITY wherever it sits in the line
        options = ["Diffusivity 0.8 Viscosity", "QUALITY Chlorine mg/L"]
        with self.assertNoLogs("wudesim.epanet.io", level="WARNING"):
            wn = self.read(_network_lines(options=options))
        self.assertAlmostEqual(wn.options.hydraulic.viscosity, 0.8)
        self.assertAlmostEqual(wn.options.quality.diffusivity, 1.0)

    def test_time_keyword_without_value(self):
        times = ["Duration", "Report Timestep 1:00"]
        with self.assertRaises(ENSyntaxError) as cm:
            self.read(_network_lines(times=times))
        self.assertEqual(cm.exception.code, 201)

    def test_inline_comment_ignored(self):
        times = ["Duration 6:00 ; not the Report Start", "Report Timestep 1:00"]
        wn = self.read(_network_lines(times=times))
        self.assertEqual(wn.options.time.duration, HourMinute(6, 0))
        self.assertEqual(wn.options.time.report_start, HourMinute(0, 0))

    def test_reactions(self):
        reactions = ["Order Bulk 1", "Order Wall 0", "Global Bulk -1.0", "Global Wall -2.0",
                     "Limiting Potential 0.5"]
        lines = _network_lines(reactions=reactions)
        inpfile = InpFile()
        wn = inpfile.read_lines(lines)
        raw = inpfile.wn.options.reaction
        self.assertAlmostEqual(raw.wall_coeff, -2.0)
        self.assertAlmostEqual(raw.limiting_potential, 0.5)
        reaction = wn.options.reaction
        self.assertAlmostEqual(reaction.bulk_coeff, -1.0 / 86400)
        self.assertAlmostEqual(reaction.wall_coeff, -2.0 / (0.3048 ** 2 * 86400))

    def test_bad_wall_order(self):
        with self.assertRaises(ENValueError):
            self.read(_network_lines(reactions=["Order Wall 2"]))

    def test_missing_junctions(self):
        with self.assertRaises(ENKeyError) as cm:
            self.read(_network_lines(junctions=False))
        self.assertEqual(cm.exception.code, 312)

    def test_empty_pipes(self):
        with self.assertRaises(ENKeyError) as cm:
            self.read(_network_lines(pipes=["; no pipes"]))
        self.assertEqual(cm.exception.code, 312)

    def test_short_pipe_record(self):
        with self.assertRaises(ENSyntaxError) as cm:
            self.read(_network_lines(pipes=["P1 R1 J1 100"]))
        self.assertEqual(cm.exception.code, 201)

    def test_short_junction_record(self):
        with self.assertRaises(ENSyntaxError):
            self.read(_network_lines(junctions=["J1 100"]))

    def test_non_numeric_length(self):
        with self.assertRaises(ENValueError) as cm:
            self.read(_network_lines(pipes=["P1 R1 J1 long 12"]))
        self.assertEqual(cm.exception.code, 202)

    def test_duplicate_pipe(self):
        with self.assertRaises(ENSyntaxError) as cm:
            self.read(_network_lines(pipes=["P1 R1 J1 100 12", "P1 J1 J2 100 12"]))
        self.assertEqual(cm.exception.code, 215)

    def test_trailing_tokens_ignored(self):
        extra = ["[PUMPS]", "PU1 R1 J1 HEAD curve1 SPEED 1.2", "[VALVES]", "V1 J1 J2 12 PRV 50 0"]
        wn = self.read(_network_lines(extra=extra))
        self.assertEqual(wn.get_link("PU1").end_node_name, "J1")
        self.assertEqual(wn.get_link("V1").start_node_name, "J1")

    def test_tank_optional_fields(self):
        extra = ["[TANKS]", "T1 850", "T2 850 120 100 150 50 0 VC1 YES"]
        wn = self.read(_network_lines(extra=extra))
        t1 = wn.get_node("T1")
        self.assertAlmostEqual(t1.elevation, 850.0)
        self.assertIsNone(t1.max_level)
        t2 = wn.get_node("T2")
        self.assertEqual(t2.vol_curve, "VC1")
        self.assertEqual(t2.overflow, "YES")

    def test_empty_input(self):
        with self.assertRaises(EpanetException) as cm:
            self.read([])
        self.assertEqual(cm.exception.code, 311)


class TestReadFiles(unittest.TestCase):
    def test_missing_file(self):
        with self.assertRaises(EpanetException) as cm:
            read_lines(join(test_datadir, "does_not_exist.inp"))
        self.assertEqual(cm.exception.code, 302)

    def test_empty_file(self):
        with self.assertRaises(EpanetException) as cm:
            InpFile().read(join(test_datadir, "empty.inp"))
        self.assertEqual(cm.exception.code, 311)

    def test_quality_age(self):
        with self.assertRaises(ENValueError):
            InpFile().read(join(test_datadir, "quality_age.inp"))

    def test_no_junctions(self):
        with self.assertRaises(ENKeyError):
            InpFile().read(join(test_datadir, "no_junctions.inp"))


if __name__ == "__main__":
    unittest.main()
