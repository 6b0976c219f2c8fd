#!/usr/bin/env python3
"""
Quick performance check of the search: alpha-beta against plain minimax,
and single against batched evaluation.
"""

import time

from discriminant import BoardEngine, MaterialEvaluator, SearchEngine


def benchmark_pruning(depth=3):
    """Compare node counts and time with and without alpha-beta pruning"""
    print(f"Benchmarking Search at Depth {depth}")
    print("-" * 40)

    engine = BoardEngine()
    # open the position a little so quadratics and linears can move
    for fr, fc, tr, tc in [(6, 3, 5, 3), (2, 4, 3, 4), (6, 4, 5, 4), (2, 3, 3, 3)]:
        outcome = engine.move_piece(fr, fc, tr, tc)
        if outcome.pending:
            engine.complete_turn(outcome.events)

    results = {}
    for use_pruning in (False, True):
        searcher = SearchEngine(engine, use_pruning=use_pruning)
        start_time = time.time()
        score, move = searcher.search(depth)
        results[use_pruning] = (score, searcher.nodes, time.time() - start_time)

    for use_pruning, (score, nodes, elapsed) in results.items():
        label = "Alpha-beta" if use_pruning else "Minimax"
        print(f"{label:11s} score {score:5d} | {nodes:7d} nodes | {elapsed:.3f}s")
    print(f"Node reduction:  {results[False][1] / max(1, results[True][1]):.1f}x")


def benchmark_batch_evaluation(num_boards=2000):
    """Compare per-board evaluation with the vectorized batch path"""
    print("\nBenchmarking Batch Evaluation")
    print("-" * 40)

    evaluator = MaterialEvaluator()
    boards = [BoardEngine().board for _ in range(num_boards)]
    player = BoardEngine().current_player

    start_time = time.time()
    single = [evaluator.evaluate_position(b, player) for b in boards]
    single_time = time.time() - start_time

    start_time = time.time()
    batch = evaluator.batch_evaluate(boards, player)
    batch_time = time.time() - start_time

    assert list(batch) == single
    print(f"Single: {single_time:.3f}s for {num_boards} boards")
    print(f"Batch:  {batch_time:.3f}s for {num_boards} boards")


if __name__ == "__main__":
    benchmark_pruning()
    benchmark_batch_evaluation()
