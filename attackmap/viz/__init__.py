"""Turn discovered assets into DOT, GEXF, Graphistry and Maltego files."""