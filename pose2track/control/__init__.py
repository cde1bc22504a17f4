"""Tracking pipeline: samples, extent, encoding, control loop."""
