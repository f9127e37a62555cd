#!/usr/bin/env python3
"""
Run the challenge runners from the command line.

Usage: python3 -m blockattack [-s SEED] [-t TRIALS] [-v] {1,2,3,9,11,12,13,15,16,17,all}
"""

import argparse

from blockattack import challenges
from blockattack.rng import SeededRandomSource

CHALLENGES = ["1", "2", "3", "9", "11", "12", "13", "15", "16", "17"]


def run(name: str, args) -> None:
    rng = SeededRandomSource(args.seed) if args.seed is not None else None
    print(f"[*] Challenge {name}")

    if name == "1":
        print("[+]", challenges.challenge_1())
    elif name == "2":
        print("[+]", challenges.challenge_2())
    elif name == "3":
        print("[+]", challenges.challenge_3())
    elif name == "9":
        print("[+]", challenges.challenge_9())
    elif name == "11":
        rate = challenges.challenge_11(args.trials, rng)
        print(f"[+] Mode detected correctly in {rate:.2%} of {args.trials} trials")
    elif name == "12":
        secret = challenges.challenge_12(rng, args.verbose)
        if secret is None:
            raise SystemExit("Could not determine the block size or the secret length.")
        print("[+] Recovered secret:")
        print(secret.decode(errors="replace"))
    elif name == "13":
        profile = challenges.challenge_13(rng)
        print(f"[+] Forged profile: {profile}")
    elif name == "15":
        for sample, result in challenges.challenge_15().items():
            print(f"    {sample} -> {result!r}")
    elif name == "16":
        print("[+] admin:", challenges.challenge_16(rng))
    elif name == "17":
        message = challenges.challenge_17(rng, args.verbose)
        print("[+] Decrypted message:", message.decode(errors="replace"))


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Block cipher mode attacks (ECB/CBC) and XOR cryptanalysis.")
    parser.add_argument("challenge", choices=CHALLENGES + ["all"], help="Challenge to run.")
    parser.add_argument("-s", "--seed", type=int, help="Seed the oracles' randomness (reproducible runs).")
    parser.add_argument("-t", "--trials", type=int, default=100, help="Trials for challenge 11 (default 100).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print attack progress.")
    args = parser.parse_args(argv)

    if args.trials <= 0:
        raise SystemExit("--trials must be positive.")

    names = CHALLENGES if args.challenge == "all" else [args.challenge]
    for name in names:
        try:
            run(name, args)
        except ValueError as e:
            raise SystemExit(f"Challenge {name} failed: {e}")
        print()


if __name__ == "__main__":
    main()
