from .core import run_case, run_batch, secret_range
from .io import write_csv, write_manifest
from .report import summarize, pretty_summary

__all__ = ["run_case", "run_batch", "secret_range", "write_csv", "write_manifest",
           "summarize", "pretty_summary"]
