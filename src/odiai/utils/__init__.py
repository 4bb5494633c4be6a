"""
Core pieces: translation client, history store, debounced input controller.
"""
