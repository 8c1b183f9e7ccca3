from backend.engine.gamesolver.solver import Algorithm, Solver, solve_iddfs, solve_idastar

__all__ = ["Algorithm", "Solver", "solve_iddfs", "solve_idastar"]
