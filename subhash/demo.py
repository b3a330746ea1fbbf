from __future__ import annotations

import logging
import sys
import time

from subhash.containers import HashedSet
from subhash.functors import pair_hash, sequence_hash
from subhash.hashing import Hashing
from subhash.rolling_hashes import longest_shared_substring_length, substring_frequencies

logger = logging.getLogger("subhash")

MIN_DEMO_LENGTH = 7  # The demo compares [0..3] with [3..6]


def setup_logger(level: int = logging.INFO) -> None:
    """Setup application logger"""
    logger.setLevel(level)

    logger_formatter = logging.Formatter("%(name)s - %(levelname)s - %(asctime)s - %(message)s")
    logger_formatter.converter = time.gmtime

    logger_handler = logging.StreamHandler(sys.stdout)
    logger_handler.setLevel(level)
    logger_handler.setFormatter(logger_formatter)
    logger.addHandler(logger_handler)


def main(string: str = "abacaba") -> None:
    if len(string) < MIN_DEMO_LENGTH:
        raise ValueError(f"demo string must have at least {MIN_DEMO_LENGTH} characters, got {len(string)}")
    hs = Hashing(string)

    # 1. Same substring at two offsets
    h1 = hs.substring_hash_pair(0, 2)
    h2 = hs.substring_hash_pair(4, 6)
    logger.info("%r vs %r: %s", string[0:3], string[4:7], "equal" if h1 == h2 else "different")

    # 2. General form, one value per modulus
    hv1 = hs.substring_hash(0, 3)
    hv2 = hs.substring_hash(3, 6)
    logger.info("%r vs %r: %s", string[0:4], string[3:7], "equal" if hv1 == hv2 else "different")

    # 3. and 4. Unique windows of length 3, keyed as pairs and as sequences
    windows = range(len(string) - 2)
    seen = HashedSet((hs.substring_hash_pair(i, i + 2) for i in windows), hash_fn=pair_hash)
    seen_vec = HashedSet((list(hs.substring_hash(i, i + 2)) for i in windows), hash_fn=sequence_hash)
    logger.info("Unique substrings of length 3: %d (pair keys), %d (sequence keys)", len(seen), len(seen_vec))

    # 5. Frequency of each window
    for key, count in substring_frequencies(hs, 3).items():
        logger.info("hash: %s -> freq: %d", key, count)

    # 6. Longest substring the string shares with its reverse
    logger.info("Longest substring shared with its reverse: %d", longest_shared_substring_length(string, string[::-1]))


if __name__ == "__main__":
    setup_logger()
    if len(sys.argv) > 2 or (len(sys.argv) == 2 and len(sys.argv[1]) < MIN_DEMO_LENGTH):
        print(f"Usage: python -m subhash.demo [lowercase-string of length >= {MIN_DEMO_LENGTH}]")
    else:
        main(*sys.argv[1:])
