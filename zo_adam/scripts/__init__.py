"""
Puntos de entrada de linea de comandos.
"""
