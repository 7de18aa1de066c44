import os
import unittest

import pandas as pd

from smartwatch_segmentation.data_processing.export_utils import (
    export_segment_profiles,
    profile_export_columns,
)
from smartwatch_segmentation.data_processing.formatting_utils import safe_filename, safe_sheet_name
from smartwatch_segmentation.data_processing.profiling_utils import assign_segment_names
from tests.conftest import cleanup_dir, make_profiles, make_temp_export_dir


class TestExportUtils(unittest.TestCase):
    def setUp(self):
        self.tmp = make_temp_export_dir()
        self.profiles = assign_segment_names(make_profiles([
            (1, 40.123, 5.0, 3.0, 4.0, 30.0),
            (2, 80.0, 2.0, 6.0, 5.0, 45.5),
        ]))

    def tearDown(self):
        cleanup_dir(self.tmp)

    def test_export_columns(self):
        cols = profile_export_columns(self.profiles)
        self.assertEqual(cols[0], "Cluster_Hierarchical")
        self.assertTrue(all(c.endswith("_mean") for c in cols[1:]))
        self.assertNotIn("segment_name", cols)
        self.assertNotIn("n_respondents", cols)

    def test_export_segment_profiles(self):
        out_dir = os.path.join(self.tmp, "nested", "out")
        path = export_segment_profiles(self.profiles, out_dir)
        self.assertEqual(os.path.basename(path), "segments_hierarchical.xlsx")
        self.assertTrue(os.path.isfile(path))
        read = pd.read_excel(path, sheet_name="segments_hierarchical")
        self.assertListEqual(list(read.columns), profile_export_columns(self.profiles))
        self.assertListEqual(read["Cluster_Hierarchical"].tolist(), [1, 2])
        self.assertAlmostEqual(read.loc[0, "Income_mean"], 40.123)

    def test_custom_filename(self):
        path = export_segment_profiles(self.profiles, self.tmp, filename="profiles.xlsx")
        self.assertTrue(path.endswith("profiles.xlsx"))
        self.assertTrue(os.path.isfile(path))

    def test_safe_names(self):
        self.assertEqual(safe_filename("segment radar: k=4?.png"), "segment_radar_k=4_.png")
        self.assertEqual(safe_sheet_name("a/b" * 20), ("a_b" * 20)[:31])


if __name__ == '__main__':
    unittest.main()
