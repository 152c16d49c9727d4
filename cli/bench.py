from __future__ import annotations

import time

from core.router.temporal_router import parse_query_fallback

SAMPLES = [
    "All flights leaving Australia after lunch time",
    "late night flights to Manila",
    "flights from SYD between 15:00 and 23:00",
    "anything to LHR before 9am tomorrow",
    "evening departures from MNL",
]


def main(rounds: int = 2000) -> None:
    start = time.time()
    for _ in range(rounds):
        for query in SAMPLES:
            parse_query_fallback(query)
    duration = (time.time() - start) * 1000
    per_query = duration / (rounds * len(SAMPLES))
    print(f"Fallback parse ~= {per_query:.4f} ms/query over {rounds * len(SAMPLES)} queries")


if __name__ == "__main__":
    main()
