import base64
import os
import tempfile
import unittest
import zlib

import numpy as np
import pandas as pd
from pyteomics.auxiliary import unitfloat

from ExactMS.scans.readers.mzml_reader import MzMLReader, parse_retention_time, parse_scan_number
from ExactMS.scans.readers.reader_factory import ReaderFactory
from ExactMS.scans.readers.tabular_reader import TabularReader
from ExactMS.scans.scan_file import ScanFile


def encode(values: np.ndarray, compress: bool) -> str:
    data = values.tobytes()
    if compress:
        data = zlib.compress(data)
    return base64.b64encode(data).decode("ascii")


def binary_data_array(values: np.ndarray, array_name: str, compress: bool) -> str:
    dtype_name = "64-bit float" if values.dtype == np.float64 else "32-bit float"
    dtype_accession = "MS:1000523" if values.dtype == np.float64 else "MS:1000521"
    compression_name = "zlib compression" if compress else "no compression"
    compression_accession = "MS:1000574" if compress else "MS:1000576"
    array_accession = "MS:1000514" if array_name == "m/z array" else "MS:1000515"
    return f"""
        <binaryDataArray encodedLength="0">
          <cvParam cvRef="MS" accession="{dtype_accession}" name="{dtype_name}" value=""/>
          <cvParam cvRef="MS" accession="{compression_accession}" name="{compression_name}" value=""/>
          <cvParam cvRef="MS" accession="{array_accession}" name="{array_name}" value=""/>
          <binary>{encode(values, compress)}</binary>
        </binaryDataArray>"""


def spectrum(index, ms_level, rt_minutes, mz, intensity, compress):
    return f"""
    <spectrum index="{index}" id="controllerType=0 controllerNumber=1 scan={index + 1}" defaultArrayLength="{len(mz)}">
      <cvParam cvRef="MS" accession="MS:1000511" name="ms level" value="{ms_level}"/>
      <cvParam cvRef="MS" accession="MS:1000128" name="profile spectrum" value=""/>
      <scanList count="1">
        <scan>
          <cvParam cvRef="MS" accession="MS:1000016" name="scan start time" value="{rt_minutes}" unitCvRef="UO" unitAccession="UO:0000031" unitName="minute"/>
        </scan>
      </scanList>
      <binaryDataArrayList count="2">{binary_data_array(mz, "m/z array", compress)}{binary_data_array(intensity, "intensity array", compress)}
      </binaryDataArrayList>
    </spectrum>"""


class TestMzMLReader(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.mz = np.array([100.0, 100.1, 100.2, 100.3], dtype=np.float64)
        self.intensity = np.array([0.0, 10.0, 40.0, 5.0], dtype=np.float32)
        content = f"""<?xml version="1.0" encoding="utf-8"?>
<mzML xmlns="http://psi.hupo.org/ms/mzml" version="1.1.0">
  <run id="run">
    <spectrumList count="2">{spectrum(0, 1, 1.5, self.mz, self.intensity, True)}{spectrum(1, 2, 1.6, self.mz, self.intensity, False)}
    </spectrumList>
  </run>
</mzML>
"""
        self.path = os.path.join(self.tmp_dir.name, "sample.mzML")
        with open(self.path, "w") as f:
            f.write(content)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_read_spectra(self):
        scans = list(MzMLReader().read(ScanFile(self.path)))

        self.assertEqual(len(scans), 2)
        first = scans[0]
        np.testing.assert_array_equal(first.mz, self.mz)
        np.testing.assert_array_equal(first.intensity, self.intensity.astype(np.float64))
        self.assertEqual(first.intensity.dtype, np.float64)
        self.assertEqual(first.ms_level, 1)
        self.assertEqual(first.scan_number, 1)
        self.assertAlmostEqual(first.retention_time, 90.0)

        # uncompressed arrays
        np.testing.assert_array_equal(scans[1].mz, self.mz)
        self.assertEqual(scans[1].ms_level, 2)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            list(MzMLReader().read(ScanFile(os.path.join(self.tmp_dir.name, "missing.mzML"))))

    def test_truncated_file(self):
        with open(self.path) as f:
            content = f.read()
        truncated_path = os.path.join(self.tmp_dir.name, "truncated.mzML")
        with open(truncated_path, "w") as f:
            f.write(content[: content.index("<scanList")])

        with self.assertRaises(ValueError):
            list(MzMLReader().read(ScanFile(truncated_path)))

    def test_parse_retention_time(self):
        self.assertEqual(
            parse_retention_time({"scanList": {"scan": [{"scan start time": unitfloat(5.0, "second")}]}}),
            5.0,
        )
        self.assertEqual(
            parse_retention_time({"scanList": {"scan": [{"scan start time": unitfloat(2.0, "minute")}]}}),
            120.0,
        )
        self.assertTrue(np.isnan(parse_retention_time({"id": "scan=1"})))

    def test_parse_scan_number(self):
        self.assertEqual(parse_scan_number("controllerType=0 controllerNumber=1 scan=42"), 42)
        self.assertIsNone(parse_scan_number("index=3"))


class TestTabularReader(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_read_scans(self):
        path = os.path.join(self.tmp_dir.name, "scans.tsv")
        pd.DataFrame(
            {
                "scan": [7, 7, 7, 8, 8],
                "mz": [100.0, 100.1, 100.2, 200.0, 200.1],
                "intensity": [1.0, 5.0, 2.0, 3.0, 4.0],
                "retention_time": [12.0, 12.0, 12.0, 13.5, 13.5],
            }
        ).to_csv(path, sep="\t", index=False)

        scans = list(TabularReader().read(ScanFile(path)))

        self.assertEqual([scan.scan_number for scan in scans], [7, 8])
        self.assertEqual(scans[0].identifier, "scan=7")
        np.testing.assert_array_equal(scans[0].intensity, [1.0, 5.0, 2.0])
        self.assertEqual(scans[1].retention_time, 13.5)
        self.assertIsNone(scans[1].ms_level)

    def test_missing_columns(self):
        path = os.path.join(self.tmp_dir.name, "scans.csv")
        pd.DataFrame({"scan": [1], "mz": [100.0]}).to_csv(path, index=False)

        with self.assertRaises(ValueError):
            list(TabularReader().read(ScanFile(path)))


class TestReaderFactory(unittest.TestCase):
    def test_get_reader(self):
        self.assertIsInstance(ReaderFactory.get_reader(ScanFile("a.mzML")), MzMLReader)
        self.assertIsInstance(ReaderFactory.get_reader(ScanFile("a.csv")), TabularReader)
        self.assertIsInstance(ReaderFactory.get_reader(ScanFile("a.TSV")), TabularReader)

    def test_unsupported_extension(self):
        with self.assertRaises(ValueError):
            ReaderFactory.get_reader(ScanFile("a.mgf"))

    def test_unique_extensions(self):
        self.assertEqual(
            len(ReaderFactory.VALID_EXTENSIONS), len(set(ReaderFactory.VALID_EXTENSIONS))
        )


if __name__ == "__main__":
    unittest.main()
