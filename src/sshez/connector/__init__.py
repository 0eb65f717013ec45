"""Connector module for SSH client hand-off."""

from sshez.connector.base import Connector
from sshez.connector.ssh import ExecConfig, ExecConnector

__all__ = ["Connector", "ExecConfig", "ExecConnector"]
