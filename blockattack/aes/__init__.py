from .primitive import BLOCK_SIZE, KEY_SIZE, AESBlockCipher, AES128
from .padding import pad, pad_to_block, strip
from .modes import ecb_encrypt, ecb_decrypt, cbc_encrypt, cbc_decrypt

__all__ = [
    "BLOCK_SIZE", "KEY_SIZE", "AESBlockCipher", "AES128",
    "pad", "pad_to_block", "strip",
    "ecb_encrypt", "ecb_decrypt", "cbc_encrypt", "cbc_decrypt",
]
