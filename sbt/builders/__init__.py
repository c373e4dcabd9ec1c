'''Builders which assemble bijections from pairs of opposing injections'''
