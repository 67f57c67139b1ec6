"""
Package: config
Description: Settings and constants for sqs_drain.
"""
