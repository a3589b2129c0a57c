from lazo.reader.parser import tokenize, parse, read
