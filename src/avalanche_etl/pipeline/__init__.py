"""
Pipeline orchestration for a full ETL run.
"""

from .executor import PipelineReport, execute_pipeline

__all__ = ["PipelineReport", "execute_pipeline"]
