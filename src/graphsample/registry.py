# registry.py
"""Thread-safe name -> callable tables for samplers and RPC methods.

Usage:
    - decorate functions with @register_sampler("frontier") or @register_method("sample.frontier")
    - look them up with get_sampler(...) / get_method(...); list with list_samplers() / list_methods()

The server's dispatch table is METHOD_REG; anything registered there becomes
callable over the wire as ``handler(params, rng)``. Entries are registered at
import time, so import ``graphsample.samplers`` / ``graphsample.server`` first.
"""
from typing import Callable, Dict, Iterable
import threading

_LOCK = threading.RLock()

class RegistryError(Exception):
    pass

class _Registry:
    def __init__(self, kind: str = "entry"):
        self.kind = kind
        self._items: Dict[str, Callable] = {}

    def register(self, name: str, obj: Callable, overwrite: bool = False):
        name = str(name)
        with _LOCK:
            if name in self._items and not overwrite:
                raise RegistryError(f"{self.kind} '{name}' already registered")
            self._items[name] = obj

    def get(self, name: str) -> Callable:
        with _LOCK:
            obj = self._items.get(name)
        if obj is None:
            raise RegistryError(f"{self.kind} '{name}' not found. Available: {sorted(self._items)}")
        return obj

    def unregister(self, name: str):
        with _LOCK:
            if self._items.pop(name, None) is None:
                raise RegistryError(f"{self.kind} '{name}' not found, cannot unregister")

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)

    def names(self) -> Iterable[str]:
        return list(self._items)

SAMPLER_REG = _Registry("sampler")
METHOD_REG = _Registry("method")

def register_sampler(name: str, overwrite: bool = False):
    def dec(fn: Callable):
        SAMPLER_REG.register(name, fn, overwrite=overwrite)
        return fn
    return dec

def register_method(name: str, overwrite: bool = False):
    def dec(fn: Callable):
        METHOD_REG.register(name, fn, overwrite=overwrite)
        return fn
    return dec

def get_sampler(name: str) -> Callable:
    return SAMPLER_REG.get(name)

def get_method(name: str) -> Callable:
    return METHOD_REG.get(name)

def has_method(name: str) -> bool:
    return name in METHOD_REG

def list_samplers() -> Iterable[str]:
    return SAMPLER_REG.names()

def list_methods() -> Iterable[str]:
    return METHOD_REG.names()
