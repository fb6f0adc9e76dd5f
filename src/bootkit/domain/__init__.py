"""Boot-time domain records and the fatal error hierarchy."""
