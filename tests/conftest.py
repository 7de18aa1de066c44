import os
import shutil
import tempfile

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd

LIKERT_COLUMNS = ["ConstCom", "TimelyInf", "TaskMgm", "DeviceSt", "Wellness", "Athlete", "Style"]

# Likert centers per synthetic segment, then Income / Age centers
SEGMENT_CENTERS = [
    ([6, 6, 6, 6, 3, 2, 4], 120, 35),
    ([4, 4, 3, 4, 7, 7, 3], 70, 30),
    ([2, 2, 2, 2, 2, 2, 2], 35, 55),
    ([3, 3, 3, 3, 4, 2, 7], 180, 50),
]

MISSING_CELLS = [(3, "Income"), (5, "Wellness"), (17, "Wellness"), (22, "Age"), (1, "Occupation")]


def make_survey(n_per_segment=10, missing=True, seed=7):
    """Synthetic survey with four well separated respondent groups."""
    rng = np.random.default_rng(seed)
    rows = []
    for seg, (likert, income, age) in enumerate(SEGMENT_CENTERS):
        for _ in range(n_per_segment):
            row = {
                col: int(np.clip(center + rng.integers(-1, 2), 1, 7))
                for col, center in zip(LIKERT_COLUMNS, likert)
            }
            row["AmznP"] = int(seg in (0, 3))
            row["Female"] = seg % 2
            row["Degree"] = 2 if seg in (0, 1) else 1
            row["Income"] = float(round(income + rng.normal(0, 5), 1))
            row["Age"] = float(round(age + rng.normal(0, 3)))
            row["Occupation"] = str(rng.choice(["Engineer", "Teacher", "Nurse"]))
            rows.append(row)
    df = pd.DataFrame(rows)
    if missing:
        for idx, col in MISSING_CELLS:
            if idx < len(df):
                if pd.api.types.is_integer_dtype(df[col]):
                    df[col] = df[col].astype(float)
                df.loc[idx, col] = np.nan
    return df


def make_profiles(rows):
    """Profile table from (cluster, Income, Wellness, Style, TaskMgm, Age) tuples."""
    cols = ["Cluster_Hierarchical", "Income_mean", "Wellness_mean", "Style_mean", "TaskMgm_mean", "Age_mean"]
    df = pd.DataFrame(rows, columns=cols)
    df.insert(1, "n_respondents", 10)
    df.insert(2, "size_pct", 100.0 / len(df) if len(df) else 0.0)
    return df


def make_temp_export_dir():
    tmp = tempfile.mkdtemp(prefix='segments_')
    return tmp


def cleanup_dir(d):
    if os.path.isdir(d):
        shutil.rmtree(d)
