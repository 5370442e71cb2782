"""modsweep - remove a project's declared dependency folders from node_modules."""

__version__ = "0.1.0"
