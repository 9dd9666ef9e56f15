from mcmcscan.samplers.ensemble_scan import AdaptiveScan, ScanStatus

__all__ = [
    "AdaptiveScan",
    "ScanStatus",
]
