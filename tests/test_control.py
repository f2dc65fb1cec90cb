import json
import unittest
from io import StringIO
from unittest.mock import patch
from thermite import control


class TestControl(unittest.TestCase):
    def _run(self, argv, stdin=""):
        with patch("sys.stdout", new_callable=StringIO) as stdout, patch("sys.stdin", StringIO(stdin)):
            status = control.main(argv)
        return status, stdout.getvalue()

    def test_no_arguments_prints_help(self):
        status, output = self._run([])
        self.assertEqual(status, 0)
        self.assertIn("usage:", output)

    def test_encode_weekly(self):
        status, output = self._run(["--encode-weekly", "3,0,1,0,0,0,2"])
        self.assertEqual(status, 0)
        self.assertEqual(output.strip(), "0x2013")

    def test_decode_weekly(self):
        status, output = self._run(["--decode-weekly", "0x2013"])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(output), [3, 0, 1, 0, 0, 0, 2])

    def test_encode_daily(self):
        slots = ",".join(["1", "2", "3", "0"] + ["0"] * 44)
        status, output = self._run(["--encode-daily", slots])
        self.assertEqual(status, 0)
        self.assertEqual(output.strip(), "39" + "00" * 11)

    def test_decode_daily(self):
        status, output = self._run(["--decode-daily", "ff" * 12])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(output), [3] * 48)

    def test_invalid_slots(self):
        status, output = self._run(["--encode-weekly", "4,0,0,0,0,0,0"])
        self.assertEqual(status, 1)
        self.assertEqual(output, "")

        status, _ = self._run(["--encode-daily", "0,0,0"])
        self.assertEqual(status, 1)

        status, _ = self._run(["--decode-daily", "not hex"])
        self.assertEqual(status, 1)

    def test_empty_slot_field_is_rejected(self):
        status, output = self._run(["--encode-weekly", "3,0,,1,0,0,0,2"])
        self.assertEqual(status, 1)
        self.assertEqual(output, "")

        status, _ = self._run(["--encode-weekly", "3,0,1,0,0,0,2,"])
        self.assertEqual(status, 1)

    def test_empty_values_are_rejected(self):
        for flag in ("--encode-weekly", "--encode-daily", "--decode-weekly", "--decode-daily", "--target-temp"):
            status, output = self._run([flag, ""])
            self.assertEqual(status, 1, flag)
            self.assertEqual(output, "", flag)

    def test_heater(self):
        status, output = self._run(["--target-temp", "2024-01-01T10:00", "--heater", "18.5"])
        self.assertEqual(status, 0)
        self.assertEqual(output.split(), ["20.0", "on"])

        status, output = self._run(["--target-temp", "2024-01-01T10:00", "--heater", "19.5"])
        self.assertEqual(status, 0)
        self.assertEqual(output.split(), ["20.0", "off"])

        status, output = self._run(
            ["--target-temp", "2024-01-01T10:00", "--heater", "19.5", "--hysteresis", "0.5"]
        )
        self.assertEqual(output.split(), ["20.0", "on"])

    def test_print_settings(self):
        status, output = self._run(["--print-settings"])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(output)["weeklySchedule"], 0x2002)

    def test_settings_from_stdin(self):
        stdin = json.dumps({"vacation": True})
        status, output = self._run(["--settings", "-", "--target-temp", "2024-01-01T10:00"], stdin)
        self.assertEqual(status, 0)
        self.assertEqual(output.strip(), "14.0")

    def test_invalid_settings(self):
        status, _ = self._run(["--settings", "-", "--print-settings"], "{not json")
        self.assertEqual(status, 1)

        status, output = self._run(["--settings", "-", "--print-settings"], json.dumps({"weeklySchedule": -1}))
        self.assertEqual(status, 1)
        self.assertEqual(output, "")

    def test_target_temp(self):
        status, output = self._run(["--target-temp", "2024-01-01T10:00"])
        self.assertEqual(status, 0)
        self.assertEqual(output.strip(), "20.0")

    def test_describe(self):
        status, output = self._run(["--describe"])
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(output)["weeklySchedule"], [2, 0, 0, 0, 0, 0, 2])


if __name__ == "__main__":
    unittest.main()
