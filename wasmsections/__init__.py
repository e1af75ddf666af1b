"""In-memory model of WebAssembly module sections: arenas, custom sections, data and element segments, exports, debug address mapping and entry trees."""

__version__ = "0.1.0"

__all__ = ["arena", "custom", "data", "elements", "exports", "expression", "units"]