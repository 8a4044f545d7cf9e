"""
errors.py - Eccezioni del layer numerico
"""


class DimensionMismatchError(ValueError):
    """Dimensioni incompatibili tra vettori, matrici o griglia e sistema"""


class BoundaryConfigurationError(ValueError):
    """Griglia troppo piccola: nessuna cella interna da risolvere"""
