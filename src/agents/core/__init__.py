"""
Core agent library: provider contract, cancellation, agent profiles and registry.
"""
