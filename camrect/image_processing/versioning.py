# -*- coding: utf-8 -*-
"""
Processor Versioning - Version decorator for image processors.

Provides the ``@processor_version`` class decorator for stamping semantic
version strings on image processor classes. The version identifies both
the algorithm and the output layout it produces.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
from typing import Optional, Type, TypeVar
import importlib.metadata

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps a processor version on an image processor.

    Sets ``__processor_version__`` as a class attribute. If a version is
    not provided, it is inferred from the installed ``camrect`` package
    metadata.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Returns
    -------
    Callable
        Class decorator that sets ``__processor_version__`` on the class.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyTransform(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>>
    >>> MyTransform.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('camrect')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator
