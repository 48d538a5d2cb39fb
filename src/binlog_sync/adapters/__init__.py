"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: the command line
- Outbound adapters: filesystem, mysqlbinlog, process table, compression tool, clock
"""
