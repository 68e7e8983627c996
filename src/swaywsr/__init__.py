from swaywsr.main import Swaywsr

__all__ = ["Swaywsr"]
