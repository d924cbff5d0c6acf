"""
cdtsim: Metropolis-Hastings sampling of 3D Causal Dynamical Triangulations

A Markov Chain Monte Carlo engine that evolves a foliated simplicial
complex by ergodic (Pachner) moves.

Core concepts:
- The geometry enters only through three counts: timelike edges N1_TL,
  (3,1)/(1,3) simplices N3_31 and (2,2) simplices N3_22
- Each move changes those counts by a fixed amount
- The bulk action S(N1_TL, N3_31, N3_22; α, K, λ) weighs each state
- A move is made with probability a1·a2, where a1 corrects for how often
  the move is proposed and a2 = min(1, e^{-ΔS})
- Attempted/successful counters and the counts must never drift
"""

__version__ = "0.1.0"
