import snowland

if __name__ == '__main__':
	snowland.run_as_a_module()
