"""Command line interface: ``docforge apply`` and ``docforge config``."""
