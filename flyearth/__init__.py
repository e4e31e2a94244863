"""Globe camera, cubesphere mesh and city spawning for a flight game set on Earth."""

__version__ = "0.1.0"
__all__ = ["camera", "cities", "cubesphere", "game"]