"""
Data Processing Module

This module contains the stages of the survey segmentation:
- Loading and outlier diagnostics
- Imputation and standardization
- Cluster-count diagnostics and hierarchical clustering
- Segment profiling, ranking and partner recommendation
- Visualization and export
"""
