"""
Frontend Package

visualization/ : Timeline -> HTML grid (pure)
state/         : owned display session, save-to-file
"""
