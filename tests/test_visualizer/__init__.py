"""HTTP bridge tests"""
