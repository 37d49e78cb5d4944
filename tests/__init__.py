"""Test package for mindbench.

The game and session state machines are exercised directly with a fake
clock. The pygame smoke tests run headlessly with SDL's dummy drivers so no
real window is opened. Run ``pytest`` from the project root.
"""
