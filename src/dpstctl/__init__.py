"""Report, enable, or disable Intel Display Power Saving Technology (DPST)."""
