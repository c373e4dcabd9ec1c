'''Example consumers of the toolkit, supplying concrete injections'''
