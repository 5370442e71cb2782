"""Recursive, concurrent removal of dependency module directories.

This package scans target directories, deletes their contents files
first and directories deepest-first, and coordinates many independent
targets with per-target fault isolation.
"""

from modsweep.removal.classifier import FileClassifier
from modsweep.removal.coordinator import RemovalCoordinator
from modsweep.removal.errors import RemovalError, ScanError, SweepError
from modsweep.removal.fsio import AsyncFilesystem, LocalFilesystem
from modsweep.removal.models import (
    EntryKind,
    PipelinePhase,
    RemovalReport,
    ScanResult,
    TargetOutcome,
    TargetState,
)
from modsweep.removal.remover import SubtreeRemover
from modsweep.removal.scanner import TreeScanner

__all__ = [
    "AsyncFilesystem",
    "EntryKind",
    "FileClassifier",
    "LocalFilesystem",
    "PipelinePhase",
    "RemovalCoordinator",
    "RemovalError",
    "RemovalReport",
    "ScanError",
    "ScanResult",
    "SubtreeRemover",
    "SweepError",
    "TargetOutcome",
    "TargetState",
    "TreeScanner",
]
