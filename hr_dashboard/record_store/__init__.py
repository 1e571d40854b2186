"""Record store module — REST client and wire schemas for the attendance/leave backend."""
