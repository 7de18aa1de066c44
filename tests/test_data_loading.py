import os
import unittest

import pandas as pd

from smartwatch_segmentation.data_processing.data_loading import (
    boxplot_outliers,
    detect_outliers,
    load_survey,
    summarize_survey,
    tukey_hinges,
)
from smartwatch_segmentation.exceptions import DataValidationError
from tests.conftest import cleanup_dir, make_survey, make_temp_export_dir


class TestLoadSurvey(unittest.TestCase):
    def setUp(self):
        self.tmp = make_temp_export_dir()

    def tearDown(self):
        cleanup_dir(self.tmp)

    def test_load_csv(self):
        df = make_survey()
        path = os.path.join(self.tmp, "survey.csv")
        df.to_csv(path, index=False)
        loaded = load_survey(path)
        self.assertEqual(loaded.shape, df.shape)
        self.assertEqual(int(loaded.isna().sum().sum()), 5)

    def test_load_xlsx(self):
        df = make_survey()
        path = os.path.join(self.tmp, "survey.xlsx")
        df.to_excel(path, index=False)
        loaded = load_survey(path)
        self.assertListEqual(list(loaded.columns), list(df.columns))
        self.assertEqual(len(loaded), len(df))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_survey(os.path.join(self.tmp, "nope.xlsx"))

    def test_unsupported_extension(self):
        path = os.path.join(self.tmp, "survey.txt")
        with open(path, "w") as fh:
            fh.write("a,b\n1,2\n")
        with self.assertRaises(ValueError):
            load_survey(path)

    def test_legacy_xls_not_accepted(self):
        path = os.path.join(self.tmp, "survey.xls")
        with open(path, "wb") as fh:
            fh.write(b"\xd0\xcf\x11\xe0")
        with self.assertRaises(ValueError):
            load_survey(path)

    def test_empty_table(self):
        path = os.path.join(self.tmp, "empty.csv")
        with open(path, "w") as fh:
            fh.write("Income,Age\n")
        with self.assertRaises(DataValidationError):
            load_survey(path)

    def test_summary_has_row_per_column(self):
        df = make_survey()
        summary = summarize_survey(df)
        self.assertListEqual(list(summary.index), list(df.columns))
        self.assertEqual(summary.loc["Wellness", "count"], len(df) - 2)


class TestOutliers(unittest.TestCase):
    def test_tukey_hinges(self):
        self.assertEqual(tukey_hinges([1, 2, 3, 4, 5]), (2.0, 4.0))
        self.assertEqual(tukey_hinges([4, 1, 3, 2]), (1.5, 3.5))

    def test_boxplot_outliers(self):
        self.assertListEqual(boxplot_outliers(pd.Series([1, 2, 3, 4, 100])), [100.0])
        self.assertListEqual(boxplot_outliers(pd.Series([1, 2, 3, 4, 5])), [])
        self.assertListEqual(boxplot_outliers(pd.Series([None, None], dtype=float)), [])

    def test_outliers_keep_row_order_and_ignore_missing(self):
        s = pd.Series([-50.0, 2.0, None, 3.0, 4.0, 3.0, 2.0, 80.0])
        self.assertListEqual(boxplot_outliers(s), [-50.0, 80.0])

    def test_detect_outliers_per_column(self):
        df = make_survey(missing=False)
        df.loc[0, "Income"] = 10000.0
        out = detect_outliers(df, ["Income", "Style"])
        self.assertListEqual(list(out), ["Income", "Style"])
        self.assertIn(10000.0, out["Income"])

    def test_detect_outliers_skips_absent_column(self):
        df = make_survey(missing=False)
        with self.assertLogs("smartwatch_segmentation", level="WARNING"):
            out = detect_outliers(df, ["Income", "Loyalty"])
        self.assertNotIn("Loyalty", out)


if __name__ == '__main__':
    unittest.main()
