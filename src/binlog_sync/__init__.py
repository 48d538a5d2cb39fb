"""
Binlog Sync - Continuous MySQL binary log backup

Supervises a long-running ``mysqlbinlog --raw --stop-never`` process,
restarting it from the last captured segment when it dies, compressing
closed segments in the background and expiring old backups.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
