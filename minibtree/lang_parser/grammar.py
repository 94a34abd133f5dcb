# lark grammar for the btree command language
GRAMMAR = '''
        program          : stmnt (";" stmnt)* ";"?

        ?stmnt           : insert_stmnt | search_stmnt | empty_stmnt

        insert_stmnt     : "insert"i literal literal
        search_stmnt     : ("search"i | "find"i) literal
        empty_stmnt      : "empty"i

        // keys and values share one literal syntax
        ?literal         : INTEGER_NUMBER
                         | STRING
                         | IDENTIFIER

        IDENTIFIER       : ("_" | ("a".."z") | ("A".."Z")) ("_" | ("a".."z") | ("A".."Z") | ("0".."9"))*

        // single quoted string
        // NOTE: this doesn't have any support for escaping
        SINGLE_QUOTED_STRING  : /'[^']*'/
        STRING: SINGLE_QUOTED_STRING | DOUBLE_QUOTED_STRING

        // ref: https://github.com/lark-parser/lark/blob/master/lark/grammars/common.lark
        %import common.ESCAPED_STRING   -> DOUBLE_QUOTED_STRING
        %import common.SIGNED_INT       -> INTEGER_NUMBER
        %import common.WS
        %ignore WS
'''
