from . import checked_math as CheckedMath
from . import full_math as FullMath
from . import vault_accounting as VaultAccounting

__all__ = (
    "CheckedMath",
    "FullMath",
    "VaultAccounting",
)
