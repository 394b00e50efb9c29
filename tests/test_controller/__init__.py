"""Dispatcher and allocation strategy tests"""
