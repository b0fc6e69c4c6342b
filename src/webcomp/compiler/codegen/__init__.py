"""Code generation: printers, contexts, emitters and assemblers."""
