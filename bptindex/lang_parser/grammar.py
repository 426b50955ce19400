# lark grammar for the bptindex command language
# a program is one or more `;` separated statements, e.g.
#   insert 1 'one'; insert 2 'two'; range <= 2
GRAMMAR = '''
        program          : stmnt (";" stmnt)* ";"?

        ?stmnt           : insert_stmnt | get_stmnt | range_stmnt | size_stmnt | scan_stmnt

        insert_stmnt     : "insert"i key value
        get_stmnt        : "get"i key
        range_stmnt      : "range"i comparator key
        size_stmnt       : "size"i
        scan_stmnt       : "scan"i

        key              : literal
        value            : literal
        comparator       : LESS_EQUAL | EQUAL_EQUAL | GREATER_EQUAL

        literal          : INTEGER_NUMBER | REAL_NUMBER | STRING | NULL

        NULL             : "null"i

        // 2-char ops
        LESS_EQUAL        : "<="
        EQUAL_EQUAL       : "=="
        GREATER_EQUAL     : ">="

        // single quoted string
        // NOTE: this doesn't have any support for escaping
        SINGLE_QUOTED_STRING  : /'[^']*'/
        STRING: SINGLE_QUOTED_STRING | DOUBLE_QUOTED_STRING

        // ref: https://github.com/lark-parser/lark/blob/master/lark/grammars/common.lark
        %import common.ESCAPED_STRING   -> DOUBLE_QUOTED_STRING
        %import common.SIGNED_INT       -> INTEGER_NUMBER
        // floating point number; requires a decimal point or exponent
        %import common.SIGNED_FLOAT     -> REAL_NUMBER
        %import common.WS
        %ignore WS
'''
