from tsp_genetic.data import world_cities
from tsp_genetic.evolutionary import EvolutionConfig, GeneticAlgorithm


def main():
    cities = world_cities()
    cfg = EvolutionConfig(population_size=20, mutation_rate=0.05, generations=10)
    ga = GeneticAlgorithm(cfg)
    ga.initialize_population(cities)
    print(f"gen 0: best={ga.history[0].best:.2f} mean={ga.history[0].mean:.2f}")
    while ga.generation < cfg.generations:
        ga.step()
        best = ga.best()
        print(f"gen {ga.generation}: best={best.distance:.2f} route={' -> '.join(best.names)}")


if __name__ == "__main__":
    main()
