from seqparsec.Char import char
from seqparsec.Prim import run_parser
from seqparsec.Sequence import sequence


class TimeSequence:
    def setup(self):
        self.small = sequence([char("a")] * 1000)
        self.medium = sequence([char("a")] * 10000)
        self.large = sequence([char("a")] * 100000)
        self.input = "a" * 100000

    def time_sequence_small(self):
        run_parser(self.small, self.input)

    def time_sequence_medium(self):
        run_parser(self.medium, self.input)

    def time_sequence_large(self):
        run_parser(self.large, self.input)
