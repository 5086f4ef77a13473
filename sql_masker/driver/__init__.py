"""
Database driver module.

This package contains the Driver interface through which sql_masker reads
data, plus an in-memory implementation and a DB-API implementation.
"""

from sql_masker.driver.base import Driver, Rows
from sql_masker.driver.dbapi import DBAPIDriver
from sql_masker.driver.memory import InMemoryDriver

__all__ = [
    "DBAPIDriver",
    "Driver",
    "InMemoryDriver",
    "Rows",
]
