"""Infrastructure layer: logging and capture file access"""
