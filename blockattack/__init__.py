"""
Block cipher modes and the classic chosen-plaintext / chosen-ciphertext
attacks against them (ECB byte-at-a-time, ECB cut-and-paste, CBC bit
flipping, CBC padding oracle) plus repeating-key XOR cryptanalysis.
"""

__version__ = "0.1.0"
