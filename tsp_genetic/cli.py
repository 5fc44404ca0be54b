import argparse
import json
import sys
import time
from pathlib import Path

from tsp_genetic.data import PRESETS, load_cities, load_optimum, preset_optimum
from tsp_genetic.evaluation import PopulationStats
from tsp_genetic.evolutionary import EvolutionConfig, GeneticAlgorithm
from tsp_genetic.solvers.base import InvalidConfiguration
from tsp_genetic.solvers.genome import Tour


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _load(args):
    if args.tsp_file:
        path = Path(args.tsp_file)
        if not path.exists():
            raise InvalidConfiguration(f"No such TSPLIB file: {path}")
        log(f"loading cities from {path}")
        cities = load_cities(path)
        optimum = load_optimum(path, cities, closed=args.closed)
        if optimum is not None:
            log(f"reference tour length {optimum:.4f}")
        return cities, optimum
    return PRESETS[args.preset](), preset_optimum(args.preset, closed=args.closed)


def _progress(every: int):
    def report(generation: int, stats: PopulationStats, best: Tour) -> None:
        if every and generation % every == 0:
            log(f"gen {generation}: best={stats.best:.4f} mean={stats.mean:.4f} worst={stats.worst:.4f}")

    return report


def run(args) -> None:
    t0 = time.perf_counter()
    cities, optimum = _load(args)
    cfg = EvolutionConfig(
        population_size=args.population_size,
        mutation_rate=args.mutation_rate,
        elitism=not args.no_elitism,
        generations=args.generations,
        closed=args.closed,
        random_seed=args.seed,
    )
    ga = GeneticAlgorithm(cfg)
    if len(cities) < 2:
        log(f"only {len(cities)} city given; every tour is trivial")
    log(
        f"{len(cities)} cities, population={cfg.population_size}, "
        f"mutation_rate={cfg.mutation_rate}, elitism={cfg.elitism}, generations={cfg.generations}, "
        f"crossover={ga.crossover.name}, mutation={ga.mutation.name}"
    )
    result = ga.run(cities, on_generation=_progress(args.log_every), optimum=optimum)
    log(f"initial mean={ga.history[0].mean:.4f}, finished in {time.perf_counter() - t0:.2f}s")
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return
    print(f"Optimal tour distance: {result.distance}")
    print(f"Optimal tour: {result.route()}")
    if optimum is not None:
        print(f"Gap to reference: {result.gap:.2%}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Genetic-algorithm TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve a route over a city set")
    run_parser.add_argument("--tsp-file", default=None, help="TSPLIB .tsp file with node coordinates")
    run_parser.add_argument("--preset", choices=sorted(PRESETS), default="world")
    run_parser.add_argument("--population-size", type=int, default=100)
    run_parser.add_argument("--mutation-rate", type=float, default=0.02)
    run_parser.add_argument("--generations", type=int, default=1000)
    run_parser.add_argument("--no-elitism", action="store_true")
    run_parser.add_argument("--closed", action="store_true", help="Include the return leg to the start")
    run_parser.add_argument("--seed", type=int, default=123)
    run_parser.add_argument("--log-every", type=int, default=100)
    run_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    run_parser.set_defaults(func=run)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except InvalidConfiguration as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
