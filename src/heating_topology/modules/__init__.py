"""
Modules package for heating-topology.

- automation: Generic declarative rule models, presets, and evaluators
- heating: Boiler signal, rule, and presentation compilers
"""
