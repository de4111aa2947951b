"""
Monitoring Module

Contains the driver/BIOS listing monitor:
- Browser rendering of the vendor support page
- Row extraction
- Snapshot persistence and change detection
- Notification channels
"""
