'''Set-theoretic and iteration utilities shared across the toolkit'''
