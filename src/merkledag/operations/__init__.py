"""
Operations package - Application service layer between CLI and builder.

This package provides the Operations facade that orchestrates CLI commands,
centralizes error mapping, and handles output formatting while keeping
CLI commands thin and testable.
"""
from .facade import AddResult, Operations, OpsConfig, ShowResult
from .mappers import exit_code_for, run_and_exit

__all__ = ["AddResult", "Operations", "OpsConfig", "ShowResult", "exit_code_for", "run_and_exit"]
