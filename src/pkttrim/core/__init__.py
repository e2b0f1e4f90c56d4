"""Core processing: payload trimming and the file-level pipeline"""
