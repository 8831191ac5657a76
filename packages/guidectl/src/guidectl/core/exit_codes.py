from __future__ import annotations

OK = 0
ERR_DRIFT = 1
ERR_USAGE = 2
ERR_DERIVATION = 3
ERR_NOT_FOUND = 4
ERR_CONFIG = 5
ERR_INTERNAL = 99
