from lazo.builtin.env_builtin import BUILTINS, register
