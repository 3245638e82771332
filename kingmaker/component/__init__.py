'''Building blocks of voting methods.

Components are small, swappable pieces of method logic that can be referred
to by name: quota functions for transferable vote (:mod:`quota`) and rank
scorers for positional methods such as Borda (:mod:`rankscore`).
'''
