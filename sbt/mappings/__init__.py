'''Domains, injections, choice inverses, and the partition underlying the Schroeder-Bernstein construction'''
